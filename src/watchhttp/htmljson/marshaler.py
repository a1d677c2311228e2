"""Structural marshaler from decoded JSON to HTML.

Walks a value made of ``None``, ``bool``, numbers, ``str``, lists and
dicts with string keys (what ``json.loads`` produces) and emits HTML that
visually resembles pretty printed JSON. Rendering of each element is
delegated to a :class:`RendererConfig`; the marshaler only tracks the
JSON path, the indentation depth and the row layout.

Map keys are emitted in sorted order, arrays in index order, so the
output is deterministic for a given input.

Safe for repeated use. Not safe for concurrent use.
"""

from __future__ import annotations

import io
import math
from decimal import Decimal
from typing import Any, TextIO

from watchhttp.htmljson.html import DEFAULT_HTML, Fragment, RendererConfig
from watchhttp.htmljson.row import RowBuffer

ROOT_PATH = "$"

# Containers nested deeper than this are skipped. Each level costs two
# interpreter frames, so this stays well below the recursion limit.
MAX_DEPTH = 256


class UnsupportedTypeError(Exception):
    """A value that is not one of the six JSON variants was found."""

    def __init__(self, path: str) -> None:
        super().__init__(f"skip unsupported type at key({path})")
        self.path = path


class TooDeepError(Exception):
    """A container nested deeper than :data:`MAX_DEPTH` was found."""

    def __init__(self, path: str) -> None:
        super().__init__(f"skip too deep at key({path})")
        self.path = path


class MarshalError(Exception):
    """All errors collected during one marshal call."""

    def __init__(self, errors: list[Exception]) -> None:
        super().__init__("\n".join(str(e) for e in errors))
        self.errors = list(errors)


def canonical_string(v: float) -> str:
    """Shortest round-trip decimal form of ``v``, never in exponent notation.

    Integer-valued numbers have no fractional part: ``1.0`` renders as ``1``.
    """
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "+Inf" if v > 0 else "-Inf"
    s = format(Decimal(repr(float(v))), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


class Marshaler:
    """Converts a decoded JSON value into HTML using pluggable renderers."""

    def __init__(self, config: RendererConfig = DEFAULT_HTML) -> None:
        self.config = config
        self._rows: RowBuffer | None = None
        self._path = ROOT_PATH
        self._depth = 0
        self._errors: list[Exception] = []

    def marshal(self, value: Any) -> bytes:
        """Render ``value`` and return UTF-8 encoded HTML.

        Errors are dropped; call :meth:`marshal_to` to inspect them.
        """
        buf = io.StringIO()
        self.marshal_to(buf, value)
        return buf.getvalue().encode("utf-8")

    def marshal_to(self, sink: TextIO, value: Any) -> MarshalError | None:
        """Render ``value`` into ``sink``.

        Never raises for bad input or sink failures. As much output as
        possible is produced and every problem is returned together in
        one :class:`MarshalError`, or ``None`` when there were none.
        """
        self._path = ROOT_PATH
        self._depth = 0
        self._errors = []
        self._rows = RowBuffer(sink, self.config.row)

        self._marshal(value)
        self._rows.flush(self._depth)

        errors = self._errors + self._rows.errors
        self._rows = None
        self._errors = []
        if errors:
            return MarshalError(errors)
        return None

    def _write(self, fragment: str) -> None:
        self._rows.write(fragment)

    def _fragment(self, fragment: Fragment) -> str:
        if callable(fragment):
            return fragment(self._path)
        return fragment

    def _marshal(self, v: Any) -> None:
        cfg = self.config
        if v is None:
            self._write(cfg.null(self._path))
        elif isinstance(v, bool):
            self._write(cfg.boolean(self._path, v))
        elif isinstance(v, (int, float)):
            try:
                f = float(v)
            except OverflowError:
                # integer too large for a double
                self._errors.append(UnsupportedTypeError(self._path))
                return
            self._write(cfg.number(self._path, f, canonical_string(f)))
        elif isinstance(v, str):
            self._write(cfg.string(self._path, v))
        elif isinstance(v, (list, tuple, dict)) and self._depth >= MAX_DEPTH:
            self._errors.append(TooDeepError(self._path))
        elif isinstance(v, (list, tuple)):
            self._encode_array(v)
        elif isinstance(v, dict):
            self._encode_map(v)
        else:
            self._errors.append(UnsupportedTypeError(self._path))

    def _encode_array(self, v: list[Any] | tuple[Any, ...]) -> None:
        arr = self.config.array
        self._write(self._fragment(arr.open_bracket))

        if not v:
            self._write(self._fragment(arr.close_bracket))
            return

        path, depth = self._path, self._depth
        self._rows.flush(depth)

        self._depth = depth + 1
        try:
            for i, item in enumerate(v):
                if i > 0:
                    self._write(self._fragment(arr.comma))
                    self._rows.flush(self._depth)

                self._path = f"{path}[{i}]"

                # empty key, so array rows get the same offset as map rows
                self._write("")
                self._marshal(item)

            self._rows.flush(self._depth)
        finally:
            self._path, self._depth = path, depth

        self._write(self._fragment(arr.close_bracket))

    def _encode_map(self, v: dict[Any, Any]) -> None:
        obj = self.config.map
        self._write(self._fragment(obj.open_brace))

        entries: list[tuple[str, Any]] = []
        for k, item in v.items():
            if not isinstance(k, str):
                self._errors.append(UnsupportedTypeError(f"{self._path}.{k}"))
                continue
            entries.append((k, item))

        if not entries:
            self._write(self._fragment(obj.close_brace))
            return

        entries.sort(key=lambda kv: kv[0])

        path, depth = self._path, self._depth
        self._rows.flush(depth)

        self._depth = depth + 1
        try:
            for i, (k, item) in enumerate(entries):
                if i > 0:
                    self._write(self._fragment(obj.comma))
                    self._rows.flush(self._depth)

                self._path = f"{path}.{k}"

                self._write(obj.key(self._path, k))
                self._write(self._fragment(obj.colon))
                self._marshal(item)

            self._rows.flush(self._depth)
        finally:
            self._path, self._depth = path, depth

        self._write(self._fragment(obj.close_brace))
