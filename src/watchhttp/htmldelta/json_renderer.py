"""Delta HTML page for JSON snapshots."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TextIO

from watchhttp.htmldelta.delta import DeltaMarshaler
from watchhttp.htmljson import MarshalError, PageMarshaler

logger = logging.getLogger(__name__)

JSON_TEMPLATE_HTML = (Path(__file__).parent / "delta_json.html").read_text(encoding="utf-8")


class RenderError(Exception):
    """Raised when a snapshot cannot be decoded."""


def decode_json(raw: bytes) -> Any:
    """Decode the first JSON document in ``raw``; blank input decodes to None.

    Integers are decoded as floats, numbers have a single representation.
    """
    try:
        text = raw.decode("utf-8").lstrip()
        if not text:
            return None
        value, _ = json.JSONDecoder(parse_int=float).raw_decode(text)
    except ValueError as e:
        raise RenderError(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise RenderError("invalid JSON: nested too deep") from e
    return value


class JSONDeltaRenderer:
    """Renders JSON snapshots into an HTML page with number change classes.

    Not idempotent. Not safe for concurrent use.
    """

    def __init__(self, title: str = "", template: str = JSON_TEMPLATE_HTML) -> None:
        self.delta = DeltaMarshaler()
        self.page = PageMarshaler(template=template, title=title, marshaler=self.delta)

    def render(self, raw: bytes, sink: TextIO) -> MarshalError | None:
        """Decode ``raw`` and write the page to ``sink``.

        Raises:
            RenderError: If ``raw`` is not valid JSON. Nothing is written.
        """
        value = decode_json(raw)
        return self.page.marshal_to(sink, value)
