"""Tests for binding path parsing and lookup."""

import pytest
from hypothesis import given, strategies as st
from returns.result import Failure, Success

from evento.binding.paths import (
    BindingPath,
    BindingPathError,
    full_reference,
    interpolate,
    interpolation_paths,
    is_valid_path,
    stringify,
)


class TestParse:
    """Path syntax."""

    @pytest.mark.parametrize("path,segments", [
        ("title", ("title",)),
        ("user.email", ("user", "email")),
        ("guests[0].name", ("guests", 0, "name")),
        ("matrix[1][2]", ("matrix", 1, 2)),
        ("guests.0.name", ("guests", 0, "name")),
        ("  event.date ", ("event", "date")),
    ])
    def test_valid_paths(self, path, segments):
        assert BindingPath.parse(path).segments == segments

    @pytest.mark.parametrize("path", ["", "   ", "a..b", "a.", ".a", "[0]", "a b", "a[x]", "a[0"])
    def test_malformed_paths(self, path):
        with pytest.raises(BindingPathError):
            BindingPath.parse(path)
        assert not is_valid_path(path)

    def test_equality_by_segments(self):
        assert BindingPath.parse("a[0]") == BindingPath.parse("a.0")
        assert len({BindingPath.parse("a[0]"), BindingPath.parse("a.0")}) == 1


class TestLookup:
    """Walking payloads."""

    DATA = {
        "user": {"name": "Ada", "email": None},
        "guests": [{"name": "Grace"}, {"name": "Alan"}],
        "counts": {"0": "zero"},
    }

    def test_nested_key(self):
        assert BindingPath.parse("user.name").lookup(self.DATA) == Success("Ada")

    def test_list_index(self):
        assert BindingPath.parse("guests[1].name").lookup(self.DATA) == Success("Alan")

    def test_numeric_key_on_mapping(self):
        assert BindingPath.parse("counts.0").lookup(self.DATA) == Success("zero")

    def test_present_null_is_bound(self):
        assert BindingPath.parse("user.email").lookup(self.DATA) == Success(None)

    def test_missing_key_reports_position(self):
        assert BindingPath.parse("user.phone").lookup(self.DATA) == Failure(1)

    def test_index_out_of_range(self):
        assert isinstance(BindingPath.parse("guests[5].name").lookup(self.DATA), Failure)

    def test_descent_into_scalar(self):
        assert BindingPath.parse("user.name.first").lookup(self.DATA) == Failure(2)

    def test_descent_into_null(self):
        assert BindingPath.parse("user.email.domain").lookup(self.DATA) == Failure(2)

    def test_key_on_list(self):
        assert BindingPath.parse("guests.first").lookup(self.DATA) == Failure(1)

    @given(st.dictionaries(st.from_regex(r"[a-z]{1,8}", fullmatch=True), st.integers(), max_size=5))
    def test_top_level_keys_always_bind(self, data):
        for key, value in data.items():
            assert BindingPath.parse(key).lookup(data) == Success(value)


class TestInterpolation:
    """{{path}} expressions inside text."""

    def test_paths_are_distinct_and_ordered(self):
        text = "Hi {{ user.name }}, table {{table}} for {{user.name}}"
        assert interpolation_paths(text) == ["user.name", "table"]

    def test_full_reference(self):
        assert full_reference("{{ event.url }}") == "event.url"
        assert full_reference("  {{x}}  ") == "x"
        assert full_reference("Go to {{x}}") is None
        assert full_reference("{{a}}{{b}}") is None

    def test_interpolate(self):
        data = {"name": "Ada", "seats": 4.0, "vip": True}
        text = interpolate("{{name}}: {{seats}} seats, vip={{vip}}", lambda path: data[path])
        assert text == "Ada: 4 seats, vip=true"

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (True, "true"),
        (False, "false"),
        (3.0, "3"),
        (2.5, "2.5"),
        (7, "7"),
        ("x", "x"),
        ({"ok": True, "a": 1, "n": None}, '{"a":1,"n":null,"ok":true}'),
        (["Ada", 2], '["Ada",2]'),
    ])
    def test_stringify(self, value, expected):
        assert stringify(value) == expected

    def test_interpolate_container_as_json(self):
        data = {"guests": [{"name": "Ada"}]}
        text = interpolate("Guests: {{guests}}", lambda path: data[path])
        assert text == 'Guests: [{"name":"Ada"}]'

    def test_plain_text_untouched(self):
        assert interpolate("no bindings here", lambda path: "!") == "no bindings here"
