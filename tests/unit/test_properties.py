"""Tests for property contracts and constraint policies."""

import pytest
from hypothesis import given, strategies as st

from evento.components.properties import (
    ConstraintPolicy,
    PropertyKind,
    PropertySpec,
    coerce_properties,
    coerce_value,
)
from evento.components.renderers.content import HEADING_SCHEMA, TEXT_SCHEMA
from evento.components.renderers.custom import QR_DEFAULT_VALUE, QRCODE_SCHEMA
from evento.components.renderers.media import IMAGE_SCHEMA
from evento.core.errors import PropertyConstraintViolation


def spec(schema, name):
    return schema.get_property(name)


@pytest.mark.unit
class TestNumbers:
    """Clamped numeric properties."""

    def test_in_range_passes_through(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", 24) == 24

    def test_above_maximum_clamps(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", 500) == 200

    def test_below_minimum_clamps(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", 2) == 8

    def test_numeric_string_is_parsed(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", " 32 ") == 32

    def test_non_numeric_falls_back_to_default(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", "huge") == 16

    def test_bool_is_not_a_number(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", True) == 16

    def test_integer_kind_rounds(self):
        assert coerce_value(spec(HEADING_SCHEMA, "level"), "heading", 2.6) == 3

    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_clamped_value_always_in_domain(self, value):
        result = coerce_value(spec(TEXT_SCHEMA, "fontSize"), "text", value)
        assert 8 <= result <= 200

    @given(st.floats(allow_nan=True, allow_infinity=True))
    def test_any_float_gives_valid_level(self, value):
        result = coerce_value(spec(HEADING_SCHEMA, "level"), "heading", value)
        assert result in range(1, 7)


@pytest.mark.unit
class TestSubstitution:
    """Enum, color, and text properties fall back to the declared default."""

    def test_unknown_enum_choice(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontWeight"), "text", "heavy") == "normal"

    def test_known_enum_choice(self):
        assert coerce_value(spec(TEXT_SCHEMA, "fontWeight"), "text", "bold") == "bold"

    @pytest.mark.parametrize("color", ["#fff", "#336699", "#33669980", "rgb(10, 20, 30)", "tomato"])
    def test_valid_colors(self, color):
        assert coerce_value(spec(TEXT_SCHEMA, "color"), "text", color) == color

    @pytest.mark.parametrize("color", ["#12", "url(x)", 42, "not a color!"])
    def test_invalid_colors(self, color):
        assert coerce_value(spec(TEXT_SCHEMA, "color"), "text", color) == "#000000"

    def test_scalars_become_text(self):
        content = spec(TEXT_SCHEMA, "content")
        assert coerce_value(content, "text", 5) == "5"
        assert coerce_value(content, "text", False) == "false"

    def test_structured_value_is_not_text(self):
        assert coerce_value(spec(TEXT_SCHEMA, "content"), "text", {"a": 1}) == "Enter text here"

    def test_none_means_omitted(self):
        assert coerce_value(spec(TEXT_SCHEMA, "content"), "text", None) == "Enter text here"

    def test_empty_as_missing(self):
        assert coerce_value(spec(QRCODE_SCHEMA, "value"), "qrcode", "") == QR_DEFAULT_VALUE


@pytest.mark.unit
class TestUrls:
    """Image sources reject unsafe schemes."""

    @pytest.mark.parametrize("url", [
        "https://cdn.example.org/a.png",
        "http://example.org/b.jpg",
        "/static/c.png",
        "data:image/png;base64,iVBORw0KGgo=",
        "",
    ])
    def test_safe_urls(self, url):
        assert coerce_value(spec(IMAGE_SCHEMA, "src"), "image", url) == url

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "JavaScript:void(0)", "data:text/html,<b>x</b>"])
    def test_unsafe_urls_rejected(self, url):
        with pytest.raises(PropertyConstraintViolation) as exc:
            coerce_value(spec(IMAGE_SCHEMA, "src"), "image", url)
        assert exc.value.component_type == "image"
        assert exc.value.property == "src"


@pytest.mark.unit
def test_reject_policy_on_number_range():
    """Reject policy raises instead of clamping."""
    strict = PropertySpec(
        name="count",
        kind=PropertyKind.INTEGER,
        default=1,
        minimum=1,
        maximum=3,
        policy=ConstraintPolicy.REJECT,
    )
    assert coerce_value(strict, "widget", 2) == 2
    with pytest.raises(PropertyConstraintViolation):
        coerce_value(strict, "widget", 9)


@pytest.mark.unit
def test_coerce_properties_fills_defaults():
    """Every declared property is present after coercion."""
    props = coerce_properties("heading", HEADING_SCHEMA.properties, {"content": "Hi"})
    assert set(props) == set(HEADING_SCHEMA.property_names)
    assert props["content"] == "Hi"
    assert props["level"] == 1
    assert props.component_type == "heading"


@pytest.mark.unit
def test_coerce_properties_refuses_undeclared_keys():
    with pytest.raises(PropertyConstraintViolation) as exc:
        coerce_properties("heading", HEADING_SCHEMA.properties, {"colour": "red"})
    assert exc.value.property == "colour"


@pytest.mark.unit
def test_spec_export_omits_unset_constraints():
    exported = spec(TEXT_SCHEMA, "fontSize").to_dict()
    assert exported["type"] == "number"
    assert exported["minimum"] == 8
    assert exported["policy"] == "clamp"
    assert "enum" not in exported
    assert spec(TEXT_SCHEMA, "textAlign").to_dict()["enum"] == ["left", "center", "right", "justify"]
