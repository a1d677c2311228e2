"""Render decoded JSON documents as indented HTML.

Output looks like pretty printed JSON, but every element is wrapped in
its own tag so CSS and JavaScript can hook into individual values. Each
renderer receives the JSON path of the element it renders.
"""

from watchhttp.htmljson.collector import JSONPathCollector
from watchhttp.htmljson.html import (
    DEFAULT_ARRAY_HTML,
    DEFAULT_HTML,
    DEFAULT_MAP_HTML,
    ArrayHTML,
    MapHTML,
    RendererConfig,
    bool_html,
    null_html,
    number_html,
    string_html,
)
from watchhttp.htmljson.marshaler import (
    MarshalError,
    Marshaler,
    TooDeepError,
    UnsupportedTypeError,
    canonical_string,
)
from watchhttp.htmljson.page import DEFAULT_PAGE_TEMPLATE, PageMarshaler, marshal_html
from watchhttp.htmljson.row import DefaultRowHTML, RowBuffer

__all__ = [
    "ArrayHTML",
    "DEFAULT_ARRAY_HTML",
    "DEFAULT_HTML",
    "DEFAULT_MAP_HTML",
    "DEFAULT_PAGE_TEMPLATE",
    "DefaultRowHTML",
    "JSONPathCollector",
    "MapHTML",
    "MarshalError",
    "Marshaler",
    "PageMarshaler",
    "RendererConfig",
    "RowBuffer",
    "TooDeepError",
    "UnsupportedTypeError",
    "bool_html",
    "canonical_string",
    "marshal_html",
    "null_html",
    "number_html",
    "string_html",
]
