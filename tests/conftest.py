"""Shared test fixtures for the watchhttp test suite.

Provides sample documents and a plain-text renderer config whose output
is easy to read in assertions: each row is ``<depth>|<fragments>``.
"""

from __future__ import annotations

import pytest

from watchhttp.htmljson import ArrayHTML, MapHTML, RendererConfig


# ---------------------------------------------------------------------------
# Document Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def example_doc() -> dict:
    """A document touching every JSON variant, nested containers included."""
    return {
        "bookings": {"monday": True, "tuesday": False},
        "box-colors": ["red", "green"],
        "box-sizes": [10, 11, 12],
        "cakes": {
            "chocolate-cake": {},
            "strawberry-cake": {
                "color": "white",
                "ingredients": ["cream", "strawberry"],
                "size": 10,
            },
        },
        "drinks": [
            {"name": "soda", "price": 10.23},
            {"name": "tea", "price": 1.12},
        ],
        "fruits": [None, None],
        "ice-cream": None,
        "tables": {},
    }


# ---------------------------------------------------------------------------
# Renderer Fixtures
# ---------------------------------------------------------------------------


def plain_row(text: str, depth: int) -> str:
    return f"{depth}|{text}"


@pytest.fixture
def plain_config() -> RendererConfig:
    """Renders JSON punctuation as plain text and rows as ``depth|text``."""
    return RendererConfig(
        null=lambda path: "null",
        boolean=lambda path, v: "true" if v else "false",
        string=lambda path, v: f'"{v}"',
        number=lambda path, v, s: s,
        array=ArrayHTML(open_bracket="[", close_bracket="]", comma=","),
        map=MapHTML(open_brace="{", close_brace="}", comma=",", colon=":", key=lambda path, k: k),
        row=plain_row,
    )
