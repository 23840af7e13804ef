"""Tests for the component registry."""

import pytest

from evento.components import ComponentRegistry, builtin_components, get_registry
from evento.components.renderers.content import HEADING_SCHEMA, TEXT_SCHEMA, HeadingRenderer, TextRenderer
from evento.core.errors import UnknownComponentType

BUILTIN_TYPES = ["text", "heading", "image", "container", "divider", "shape", "qrcode", "datetime"]


@pytest.mark.unit
def test_builtin_palette(registry):
    """All built-in types are registered in declaration order."""
    assert len(registry) == 8
    assert [schema.type for schema in registry.list_all()] == BUILTIN_TYPES
    assert registry.list() == registry.list_all()


@pytest.mark.unit
def test_categories_first_seen_order(registry):
    assert registry.list_categories() == ["content", "media", "layout", "decorative", "custom"]


@pytest.mark.unit
def test_categories_partition_the_palette(registry):
    """Every schema lands in exactly one category listing."""
    seen: list[str] = []
    for category in registry.list_categories():
        members = registry.list_by_category(category)
        assert members
        assert all(schema.category == category for schema in members)
        seen.extend(schema.type for schema in members)

    assert sorted(seen) == sorted(BUILTIN_TYPES)
    assert len(seen) == len(set(seen))


@pytest.mark.unit
def test_unknown_category_is_empty(registry):
    assert registry.list_by_category("animation") == []


@pytest.mark.unit
def test_get_unknown_type(registry):
    with pytest.raises(UnknownComponentType) as exc:
        registry.get("carousel")
    assert exc.value.component_type == "carousel"
    assert "carousel" not in registry

    with pytest.raises(UnknownComponentType):
        registry.renderer("carousel")


@pytest.mark.unit
@pytest.mark.parametrize("component_type", BUILTIN_TYPES)
def test_every_type_renders_its_defaults(registry, component_type):
    """Registry totality: each schema has a renderer that accepts its defaults."""
    output = registry.render(component_type, {})
    assert output.component == component_type
    assert output.element


@pytest.mark.unit
def test_only_layout_types_are_containers(registry):
    containers = [schema.type for schema in registry.list_all() if schema.is_container]
    assert containers == ["container"]


@pytest.mark.unit
def test_duplicate_type_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        ComponentRegistry([(TEXT_SCHEMA, TextRenderer()), (TEXT_SCHEMA, TextRenderer())])


@pytest.mark.unit
def test_mismatched_renderer_rejected():
    with pytest.raises(ValueError):
        ComponentRegistry([(HEADING_SCHEMA, TextRenderer())])


@pytest.mark.unit
def test_registry_is_read_only(registry):
    """No registration API; the underlying maps are immutable views."""
    assert not hasattr(registry, "register")
    with pytest.raises(TypeError):
        registry._schemas["new"] = TEXT_SCHEMA


@pytest.mark.unit
def test_custom_subset_registry():
    subset = ComponentRegistry([(HEADING_SCHEMA, HeadingRenderer())])
    assert len(subset) == 1
    assert subset.list_categories() == ["content"]


@pytest.mark.unit
def test_process_registry_is_shared():
    assert get_registry() is get_registry()
    assert len(get_registry()) == len(builtin_components())


@pytest.mark.unit
def test_schema_export(registry):
    exported = registry.get("qrcode").to_dict()
    assert exported["type"] == "qrcode"
    assert exported["category"] == "custom"
    assert exported["container"] is False
    assert exported["defaultProps"]["size"] == 128
    assert exported["properties"]["size"]["maximum"] == 200
    assert "value" in exported["required"]
