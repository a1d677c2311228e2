"""Tests for the structural JSON to HTML marshaler."""

from __future__ import annotations

import io
import json

import pytest

from watchhttp.htmljson import (
    DEFAULT_HTML,
    JSONPathCollector,
    MarshalError,
    Marshaler,
    RendererConfig,
    TooDeepError,
    UnsupportedTypeError,
    canonical_string,
)
from watchhttp.htmljson.marshaler import MAX_DEPTH


def render(config: RendererConfig, value) -> str:
    out = io.StringIO()
    Marshaler(config).marshal_to(out, value)
    return out.getvalue()


class BrokenSink:
    def write(self, text: str) -> int:
        raise OSError("connection reset")


class TestCanonicalString:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.0, "0"),
            (-0.0, "-0"),
            (1.0, "1"),
            (10.23, "10.23"),
            (1.12, "1.12"),
            (-3.5, "-3.5"),
            (0.1, "0.1"),
            (1e16, "10000000000000000"),
            (1.5e-7, "0.00000015"),
            (123456789.0, "123456789"),
            (float("nan"), "NaN"),
            (float("inf"), "+Inf"),
            (float("-inf"), "-Inf"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        assert canonical_string(value) == expected

    def test_round_trips(self) -> None:
        for v in (0.1 + 0.2, 1 / 3, 2.5e-300, 1.7976931348623157e308):
            assert float(canonical_string(v)) == v


class TestScalars:
    def test_null(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, None) == "0|null\n"

    def test_bool(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, True) == "0|true\n"
        assert render(plain_config, False) == "0|false\n"

    def test_number(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, 42.0) == "0|42\n"

    def test_int_is_a_number(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, 7) == "0|7\n"

    def test_string(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, "hi") == '0|"hi"\n'

    def test_number_renderer_receives_float_and_canonical_string(self) -> None:
        seen = []
        cfg = DEFAULT_HTML.model_copy(update={"number": lambda p, v, s: seen.append((p, v, s)) or s})
        Marshaler(cfg).marshal(3)
        assert seen == [("$", 3.0, "3")]
        assert isinstance(seen[0][1], float)


class TestContainers:
    def test_empty_object_fits_on_one_row(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, {}) == "0|{}\n"

    def test_empty_array_fits_on_one_row(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, []) == "0|[]\n"

    def test_empty_containers_default_html_have_no_comma(self) -> None:
        for value, open_, close in (({}, "{", "}"), ([], "[", "]")):
            out = Marshaler().marshal(value).decode()
            assert f'<div class="json-lang">{open_}</div><div class="json-lang">{close}</div>' in out
            assert '<div class="json-lang">,</div>' not in out

    def test_array(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, [1, 2]) == "0|[\n1|1,\n1|2\n0|]\n"

    def test_tuple_is_an_array(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, ("a",)) == '0|[\n1|"a"\n0|]\n'

    def test_object_keys_sorted(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, {"b": 1, "a": 2}) == "0|{\n1|a:2,\n1|b:1\n0|}\n"

    def test_nested(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, {"a": [10, 20]}) == (
            "0|{\n"
            "1|a:[\n"
            "2|10,\n"
            "2|20\n"
            "1|]\n"
            "0|}\n"
        )

    def test_array_of_objects(self, plain_config: RendererConfig) -> None:
        assert render(plain_config, [{"x": None}, {}]) == (
            "0|[\n"
            "1|{\n"
            "2|x:null\n"
            "1|},\n"
            "1|{}\n"
            "0|]\n"
        )

    def test_default_html(self) -> None:
        out = Marshaler().marshal({"a": "x"}).decode()
        row0 = '<div class="json-container-row"><div class="json-container-padding"></div>'
        row1 = (
            '<div class="json-container-row"><div class="json-container-padding">'
            "&nbsp;&nbsp;&nbsp;&nbsp;</div>"
        )
        assert out == (
            row0 + '<div class="json-lang">{</div>\n</div>'
            + row1
            + '<div class="json-key json-string">a</div>'
            + '<div class="json-lang">:</div>'
            + '<div class="json-value json-string">"x"</div>\n</div>'
            + row0 + '<div class="json-lang">}</div>\n</div>'
        )


class TestDeterminism:
    def test_repeated_marshal_is_identical(self, example_doc: dict) -> None:
        m = Marshaler()
        first = m.marshal(example_doc)
        for _ in range(5):
            assert m.marshal(example_doc) == first

    def test_insertion_order_does_not_matter(self) -> None:
        a = json.loads('{"x": 1, "y": {"b": 2, "a": 3}}')
        b = json.loads('{"y": {"a": 3, "b": 2}, "x": 1}')
        assert Marshaler().marshal(a) == Marshaler().marshal(b)

    def test_state_reset_after_call(self, plain_config: RendererConfig) -> None:
        m = Marshaler(plain_config)
        out = io.StringIO()
        m.marshal_to(out, {"a": [1]})
        assert m._path == "$"
        assert m._depth == 0


class TestJSONPaths:
    def test_sorted_keys_drive_path_order(self) -> None:
        c = JSONPathCollector()
        Marshaler(c.config()).marshal({"b": 1, "a": 2})
        numbers = [p for p in c.calls if p in ("$.a", "$.b")]
        assert numbers[0] == "$.a"
        assert c.calls == ["$", "$.a", "$.a", "$.b", "$.b"]

    def test_nested_array_paths(self) -> None:
        c = JSONPathCollector()
        Marshaler(c.config()).marshal([{"a": [10, 20]}])
        assert set(c.keys) == {"$", "$[0]", "$[0].a", "$[0].a[0]", "$[0].a[1]"}

    def test_array_order_preserved(self) -> None:
        c = JSONPathCollector()
        Marshaler(c.config()).marshal([3, 1, 2])
        assert [c.keys[p] for p in c.calls[1:]] == ["3", "1", "2"]
        assert c.calls[1:] == ["$[0]", "$[1]", "$[2]"]

    def test_dotted_keys_are_joined_as_is(self) -> None:
        c = JSONPathCollector()
        Marshaler(c.config()).marshal({"a.b": {"c[0]": 1}})
        assert "$.a.b.c[0]" in c.keys

    def test_example_paths(self, example_doc: dict) -> None:
        c = JSONPathCollector()
        Marshaler(c.config()).marshal(example_doc)
        assert c.keys == {
            "$": "{",
            "$.bookings": "bookings",
            "$.bookings.monday": True,
            "$.bookings.tuesday": False,
            "$.box-colors": "box-colors",
            "$.box-colors[0]": "red",
            "$.box-colors[1]": "green",
            "$.box-sizes": "box-sizes",
            "$.box-sizes[0]": "10",
            "$.box-sizes[1]": "11",
            "$.box-sizes[2]": "12",
            "$.cakes": "cakes",
            "$.cakes.chocolate-cake": "chocolate-cake",
            "$.cakes.strawberry-cake": "strawberry-cake",
            "$.cakes.strawberry-cake.color": "white",
            "$.cakes.strawberry-cake.ingredients": "ingredients",
            "$.cakes.strawberry-cake.ingredients[0]": "cream",
            "$.cakes.strawberry-cake.ingredients[1]": "strawberry",
            "$.cakes.strawberry-cake.size": "10",
            "$.drinks": "drinks",
            "$.drinks[0]": "{",
            "$.drinks[0].name": "soda",
            "$.drinks[0].price": "10.23",
            "$.drinks[1]": "{",
            "$.drinks[1].name": "tea",
            "$.drinks[1].price": "1.12",
            "$.fruits": "fruits",
            "$.fruits[0]": "null",
            "$.fruits[1]": "null",
            "$.ice-cream": "null",
            "$.tables": "tables",
        }


class TestErrors:
    def test_no_errors(self, example_doc: dict) -> None:
        assert Marshaler().marshal_to(io.StringIO(), example_doc) is None

    def test_unsupported_type_is_skipped(self, plain_config: RendererConfig) -> None:
        out = io.StringIO()
        err = Marshaler(plain_config).marshal_to(out, {"k": object(), "a": 1})
        assert isinstance(err, MarshalError)
        assert [str(e) for e in err.errors] == ["skip unsupported type at key($.k)"]
        assert out.getvalue() == "0|{\n1|a:1,\n1|k:\n0|}\n"

    def test_counts_every_unsupported_node(self, plain_config: RendererConfig) -> None:
        out = io.StringIO()
        err = Marshaler(plain_config).marshal_to(out, [set(), 1, {"x": b"x", "y": [object()]}])
        assert err is not None
        unsupported = [e for e in err.errors if isinstance(e, UnsupportedTypeError)]
        assert [e.path for e in unsupported] == ["$[0]", "$[2].x", "$[2].y[0]"]
        assert out.getvalue().startswith("0|[\n")
        assert out.getvalue().endswith("0|]\n")

    def test_non_string_key_is_unsupported(self, plain_config: RendererConfig) -> None:
        out = io.StringIO()
        err = Marshaler(plain_config).marshal_to(out, {1: "x", "a": True})
        assert err is not None
        assert str(err) == "skip unsupported type at key($.1)"
        assert out.getvalue() == "0|{\n1|a:true\n0|}\n"

    def test_integer_too_large_for_double(self, plain_config: RendererConfig) -> None:
        out = io.StringIO()
        err = Marshaler(plain_config).marshal_to(out, {"big": 10**400, "ok": 1})
        assert str(err) == "skip unsupported type at key($.big)"
        assert out.getvalue() == "0|{\n1|big:,\n1|ok:1\n0|}\n"

    def test_errors_do_not_leak_between_calls(self, plain_config: RendererConfig) -> None:
        m = Marshaler(plain_config)
        assert m.marshal_to(io.StringIO(), object()) is not None
        assert m.marshal_to(io.StringIO(), 1) is None

    def test_sink_errors_are_returned(self) -> None:
        err = Marshaler().marshal_to(BrokenSink(), {"a": 1})
        assert err is not None
        assert len(err.errors) == 3
        assert all(isinstance(e, OSError) for e in err.errors)

    def test_aggregate_message_joins_errors(self) -> None:
        err = Marshaler().marshal_to(io.StringIO(), [object(), object()])
        assert str(err) == (
            "skip unsupported type at key($[0])\n"
            "skip unsupported type at key($[1])"
        )

    def test_deep_nesting_is_cut_off(self, plain_config: RendererConfig) -> None:
        value = json.loads("[" * 600 + "]" * 600)
        out = io.StringIO()
        err = Marshaler(plain_config).marshal_to(out, value)
        assert err is not None
        assert len(err.errors) == 1
        assert isinstance(err.errors[0], TooDeepError)
        assert err.errors[0].path == "$" + "[0]" * MAX_DEPTH
        assert str(err).startswith("skip too deep at key($[0]")
        assert out.getvalue().startswith("0|[\n")
        assert out.getvalue().endswith("0|]\n")

    def test_deep_maps_are_cut_off(self) -> None:
        value: dict = {}
        for _ in range(600):
            value = {"a": value}
        err = Marshaler().marshal_to(io.StringIO(), value)
        assert err is not None
        assert [e.path for e in err.errors] == ["$" + ".a" * MAX_DEPTH]
