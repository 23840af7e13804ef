"""Tests for ID generation system."""

import pytest

from evento.core.id import (
    Prefix,
    is_instance_id,
    is_template_id,
    is_valid,
    new_instance_id,
    new_request_id,
    new_template_id,
)


@pytest.mark.unit
class TestTypedGeneration:
    """Typed, prefixed ULIDs."""

    def test_template_id_format(self):
        id_str = new_template_id()
        assert id_str.startswith(f"{Prefix.TEMPLATE}_")
        assert is_template_id(id_str)
        assert not is_instance_id(id_str)

    def test_instance_id_format(self):
        id_str = new_instance_id()
        assert id_str.startswith(f"{Prefix.INSTANCE}_")
        assert is_instance_id(id_str)

    def test_ids_are_unique(self):
        assert len({new_template_id() for _ in range(100)}) == 100

    def test_ids_sort_by_creation(self):
        first, second = new_template_id(), new_template_id()
        assert first[:14] <= second[:14]

    def test_request_id(self):
        assert is_valid(new_request_id())


@pytest.mark.unit
class TestValidation:
    """ID parsing."""

    @pytest.mark.parametrize("id_str", ["", "invalid", "tpl_short", "tpl_" + "!" * 26])
    def test_invalid_ids(self, id_str):
        assert not is_valid(id_str)
        assert not is_template_id(id_str)

    def test_prefix_must_match(self):
        assert not is_template_id("inst_" + new_template_id()[4:])
        assert not is_instance_id("tpl_" + new_instance_id()[5:])
