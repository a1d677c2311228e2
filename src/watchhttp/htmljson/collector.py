"""Renderer set that records which JSON paths were rendered.

Useful for tests and for discovering the paths that CSS or JavaScript
hooks can bind to.
"""

from __future__ import annotations

from typing import Any

from watchhttp.htmljson.html import ArrayHTML, MapHTML, RendererConfig


class JSONPathCollector:
    """Collects JSON paths and values passed to the renderers.

    ``keys`` maps a path to the rendered value (numbers as their
    canonical string, map keys as the key, containers as their opening
    bracket when no key was recorded at the same path). ``calls`` lists
    paths in emission order. All renderers return empty fragments.
    """

    def __init__(self) -> None:
        self.keys: dict[str, Any] = {}
        self.calls: list[str] = []

    def _add(self, path: str, v: Any) -> str:
        self.keys[path] = v
        self.calls.append(path)
        return ""

    def null(self, path: str) -> str:
        return self._add(path, "null")

    def boolean(self, path: str, v: bool) -> str:
        return self._add(path, v)

    def string(self, path: str, v: str) -> str:
        return self._add(path, v)

    def number(self, path: str, v: float, s: str) -> str:
        return self._add(path, s)

    def map_key(self, path: str, k: str) -> str:
        return self._add(path, k)

    def open_container(self, bracket: str):
        def fragment(path: str) -> str:
            self.keys.setdefault(path, bracket)
            self.calls.append(path)
            return ""

        return fragment

    def config(self, row=None) -> RendererConfig:
        """Build a renderer config that routes every element to this collector."""
        update: dict[str, Any] = {
            "null": self.null,
            "boolean": self.boolean,
            "string": self.string,
            "number": self.number,
            "array": ArrayHTML(open_bracket=self.open_container("[")),
            "map": MapHTML(open_brace=self.open_container("{"), key=self.map_key),
        }
        if row is not None:
            update["row"] = row
        return RendererConfig(**update)
