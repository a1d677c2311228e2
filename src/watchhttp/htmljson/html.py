"""Default HTML renderers and the renderer configuration model.

Every JSON element is wrapped in a ``div`` with CSS classes for styling:
``json-value``, ``json-number``, ``json-string``, ``json-bool``,
``json-null``, ``json-key`` and ``json-lang`` (punctuation).

String values and map keys are emitted as is, without HTML escaping.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from watchhttp.htmljson.row import DefaultRowHTML

# A container fragment is either fixed text or a function of the JSON path.
Fragment = Union[str, Callable[[str], str]]


def null_html(path: str) -> str:
    return '<div class="json-lang json-value json-null">null</div>'


def bool_html(path: str, v: bool) -> str:
    return '<div class="json-lang json-value json-bool">' + ("true" if v else "false") + "</div>"


def string_html(path: str, v: str) -> str:
    return '<div class="json-value json-string">"' + v + '"</div>'


def number_html(path: str, v: float, s: str) -> str:
    return '<div class="json-value json-number">' + s + "</div>"


def key_html(path: str, k: str) -> str:
    return '<div class="json-key json-string">' + k + "</div>"


class ArrayHTML(BaseModel):
    model_config = ConfigDict(frozen=True)

    open_bracket: Fragment = ""
    close_bracket: Fragment = ""
    comma: Fragment = ""


class MapHTML(BaseModel):
    model_config = ConfigDict(frozen=True)

    open_brace: Fragment = ""
    close_brace: Fragment = ""
    comma: Fragment = ""
    colon: Fragment = ""
    key: Callable[[str, str], str] = Field(default=key_html)


DEFAULT_ARRAY_HTML = ArrayHTML(
    open_bracket='<div class="json-lang">[</div>',
    close_bracket='<div class="json-lang">]</div>',
    comma='<div class="json-lang">,</div>',
)

DEFAULT_MAP_HTML = MapHTML(
    open_brace='<div class="json-lang">{</div>',
    close_brace='<div class="json-lang">}</div>',
    comma='<div class="json-lang">,</div>',
    colon='<div class="json-lang">:</div>',
    key=key_html,
)


class RendererConfig(BaseModel):
    """Set of element renderers used by the marshaler.

    Constructed once and shared; use ``model_copy(update=...)`` to swap
    individual renderers.
    """

    model_config = ConfigDict(frozen=True)

    null: Callable[[str], str] = Field(default=null_html)
    boolean: Callable[[str, bool], str] = Field(default=bool_html)
    string: Callable[[str, str], str] = Field(default=string_html)
    number: Callable[[str, float, str], str] = Field(default=number_html)
    array: ArrayHTML = Field(default=DEFAULT_ARRAY_HTML)
    map: MapHTML = Field(default=DEFAULT_MAP_HTML)
    row: Callable[[str, int], str] = Field(default=DefaultRowHTML().marshal)


DEFAULT_HTML = RendererConfig()
