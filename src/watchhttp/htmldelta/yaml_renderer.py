"""Delta HTML page for YAML snapshots.

The YAML document is decoded into the same tree as JSON and rendered
with the same marshaler, in YAML flow style with ``yaml-*`` CSS classes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TextIO

import yaml

from watchhttp.htmldelta.delta import DeltaMarshaler
from watchhttp.htmldelta.json_renderer import RenderError
from watchhttp.htmljson import ArrayHTML, MapHTML, MarshalError, PageMarshaler, RendererConfig

YAML_TEMPLATE_HTML = (Path(__file__).parent / "delta_yaml.html").read_text(encoding="utf-8")

HTML_YAML_PLACEHOLDER = "{{.HTMLYAML}}"


def yaml_null_html(path: str) -> str:
    return '<div class="yaml-lang yaml-value yaml-null">null</div>'


def yaml_bool_html(path: str, v: bool) -> str:
    return '<div class="yaml-lang yaml-value yaml-bool">' + ("true" if v else "false") + "</div>"


def yaml_string_html(path: str, v: str) -> str:
    return '<div class="yaml-value yaml-string">' + v + "</div>"


def yaml_number_html(path: str, v: float, s: str) -> str:
    return '<div class="yaml-value">' + s + "</div>"


def yaml_key_html(path: str, k: str) -> str:
    return '<div class="yaml-key">' + k + "</div>"


def yaml_row_html(text: str, depth: int) -> str:
    pad = "&nbsp;" * (2 * depth)
    return '<div class="yaml-container-row"><div class="yaml-container-padding">' + pad + "</div>" + text + "</div>"


YAML_HTML = RendererConfig(
    null=yaml_null_html,
    boolean=yaml_bool_html,
    string=yaml_string_html,
    number=yaml_number_html,
    array=ArrayHTML(
        open_bracket='<div class="yaml-lang">[</div>',
        close_bracket='<div class="yaml-lang">]</div>',
        comma='<div class="yaml-lang">,</div>',
    ),
    map=MapHTML(
        open_brace='<div class="yaml-lang">{</div>',
        close_brace='<div class="yaml-lang">}</div>',
        comma='<div class="yaml-lang">,</div>',
        colon='<div class="yaml-lang">:</div>',
        key=yaml_key_html,
    ),
    row=yaml_row_html,
)


def decode_yaml(raw: bytes) -> Any:
    """Decode the first YAML document in ``raw``; empty input decodes to None."""
    try:
        return next(yaml.safe_load_all(raw.decode("utf-8")), None)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise RenderError(f"invalid YAML: {e}") from e
    except RecursionError as e:
        raise RenderError("invalid YAML: nested too deep") from e


class YAMLDeltaRenderer:
    """Renders YAML snapshots into an HTML page with number change classes.

    Not idempotent. Not safe for concurrent use.
    """

    def __init__(self, title: str = "", template: str = YAML_TEMPLATE_HTML) -> None:
        self.delta = DeltaMarshaler(config=YAML_HTML, css_class="yaml-value")
        self.page = PageMarshaler(
            template=template,
            title=title,
            marshaler=self.delta,
            placeholder=HTML_YAML_PLACEHOLDER,
        )

    def render(self, raw: bytes, sink: TextIO) -> MarshalError | None:
        """Decode ``raw`` and write the page to ``sink``.

        Raises:
            RenderError: If ``raw`` is not valid YAML. Nothing is written.
        """
        value = decode_yaml(raw)
        return self.page.marshal_to(sink, value)
