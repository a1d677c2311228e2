"""Render successive snapshots as HTML, marking how numbers changed.

Numbers that went up since the previous rendering get the ``number-up``
CSS class, numbers that went down get ``number-down``. The page
templates animate both.
"""

from watchhttp.htmldelta.delta import NUMBER_DOWN, NUMBER_UP, DeltaMarshaler, DeltaNumbers
from watchhttp.htmldelta.json_renderer import JSONDeltaRenderer, RenderError
from watchhttp.htmldelta.yaml_renderer import YAML_HTML, YAMLDeltaRenderer

__all__ = [
    "DeltaMarshaler",
    "DeltaNumbers",
    "JSONDeltaRenderer",
    "NUMBER_DOWN",
    "NUMBER_UP",
    "RenderError",
    "YAMLDeltaRenderer",
    "YAML_HTML",
]
