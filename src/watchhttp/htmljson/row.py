"""Row accumulation for the HTML marshaler.

The marshaler emits many small fragments per visual line (bracket, key,
colon, value, comma). They are collected here and written out as one
row, wrapped by a decorator that knows the indentation depth.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import TextIO

from pydantic import BaseModel, ConfigDict, Field

RowFunc = Callable[[str, int], str]


class DefaultRowHTML(BaseModel):
    """Wraps a row in a container div, indented with non-breaking spaces."""

    model_config = ConfigDict(frozen=True)

    padding: int = Field(default=4, ge=0, description="Spaces of indent per depth level")

    def marshal(self, text: str, depth: int) -> str:
        pad = "&nbsp;" * (self.padding * depth)
        return (
            '<div class="json-container-row">'
            '<div class="json-container-padding">' + pad + "</div>"
            + text
            + "</div>"
        )


class RowBuffer:
    """Accumulates fragments of one row and flushes them to a sink.

    ``flush`` has to be called eventually, otherwise the pending row is
    lost. Sink errors are collected in ``errors`` and never raised.
    """

    def __init__(self, sink: TextIO, row: RowFunc) -> None:
        self._buf = io.StringIO()
        self._sink = sink
        self._row = row
        self.errors: list[Exception] = []

    def write(self, fragment: str) -> None:
        self._buf.write(fragment)

    def flush(self, depth: int) -> None:
        text = self._row(self._buf.getvalue() + "\n", depth)
        try:
            self._sink.write(text)
        except (OSError, ValueError) as e:
            self.errors.append(e)
        self._buf = io.StringIO()
