"""Number renderer that remembers the last value seen at each JSON path."""

from __future__ import annotations

from typing import Any, TextIO

from watchhttp.htmljson import DEFAULT_HTML, MarshalError, Marshaler, RendererConfig

NUMBER_UP = "number-up"
NUMBER_DOWN = "number-down"


class DeltaNumbers:
    """Renders numbers with a CSS class describing the change at their path.

    The first value at a path gets no class. Later values get
    ``number-up`` or ``number-down`` when they differ from the previous
    one, and no class when equal or not comparable (NaN).

    Not idempotent: every call updates the memory.
    """

    def __init__(self, css_class: str = "json-value json-number") -> None:
        self.css_class = css_class
        self.memory: dict[str, float] = {}

    def delta_class(self, path: str, v: float) -> str:
        prev = self.memory.get(path)
        self.memory[path] = v
        if prev is None:
            return ""
        if v > prev:
            return NUMBER_UP
        if v < prev:
            return NUMBER_DOWN
        return ""

    def __call__(self, path: str, v: float, s: str) -> str:
        return '<div class="' + self.css_class + " " + self.delta_class(path, v) + '">' + s + "</div>"


class DeltaMarshaler:
    """Marshaler whose numbers are annotated against the previous call.

    Lives as long as the process; memory grows with the set of numeric
    paths observed. Not safe for concurrent use.
    """

    def __init__(
        self,
        config: RendererConfig = DEFAULT_HTML,
        css_class: str = "json-value json-number",
    ) -> None:
        self.numbers = DeltaNumbers(css_class=css_class)
        self._marshaler = Marshaler(config.model_copy(update={"number": self.numbers}))

    @property
    def memory(self) -> dict[str, float]:
        return self.numbers.memory

    def marshal(self, value: Any) -> bytes:
        return self._marshaler.marshal(value)

    def marshal_to(self, sink: TextIO, value: Any) -> MarshalError | None:
        return self._marshaler.marshal_to(sink, value)
