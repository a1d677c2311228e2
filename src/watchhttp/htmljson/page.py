"""Embed rendered JSON HTML into a full HTML page."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, TextIO

from watchhttp.htmljson.marshaler import MarshalError, Marshaler

TITLE_PLACEHOLDER = "{{.Title}}"
HTML_JSON_PLACEHOLDER = "{{.HTMLJSON}}"

DEFAULT_PAGE_TEMPLATE = (Path(__file__).parent / "default_page.html").read_text(encoding="utf-8")


class PageMarshaler:
    """Renders a value with a marshaler and substitutes it into a page template.

    Substitution is plain text replacement of every occurrence of
    ``{{.Title}}`` and of the body placeholder.
    """

    def __init__(
        self,
        template: str | bytes = DEFAULT_PAGE_TEMPLATE,
        title: str = "",
        marshaler: Marshaler | None = None,
        placeholder: str = HTML_JSON_PLACEHOLDER,
    ) -> None:
        if isinstance(template, bytes):
            template = template.decode("utf-8")
        self.template = template
        self.title = title
        self.marshaler = marshaler if marshaler is not None else Marshaler()
        self.placeholder = placeholder

    def marshal(self, value: Any) -> bytes:
        buf = io.StringIO()
        self.marshal_to(buf, value)
        return buf.getvalue().encode("utf-8")

    def marshal_to(self, sink: TextIO, value: Any) -> MarshalError | None:
        body = io.StringIO()
        err = self.marshaler.marshal_to(body, value)
        errors = list(err.errors) if err is not None else []

        page = self.template.replace(TITLE_PLACEHOLDER, self.title)
        page = page.replace(self.placeholder, body.getvalue())

        try:
            sink.write(page)
        except (OSError, ValueError) as e:
            errors.append(e)

        if errors:
            return MarshalError(errors)
        return None


def marshal_html(value: Any) -> bytes:
    """Render ``value`` into the default page with the default renderers."""
    return PageMarshaler().marshal(value)
