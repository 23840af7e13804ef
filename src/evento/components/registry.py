"""
Component Registry
Read-only catalog of component schemas and their renderers.
"""

from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from evento.core.errors import UnknownComponentType
from evento.core.logging_config import get_logger

from .renderers import Renderer, VisualOutput, builtin_components
from .schema import ComponentSchema

logger = get_logger(__name__)


class ComponentRegistry:
    """
    Immutable registry of component types.

    The type -> (schema, renderer) mapping is fixed at construction;
    there is no registration API afterwards.
    """

    __slots__ = ("_schemas", "_renderers", "_order")

    def __init__(self, components: Iterable[tuple[ComponentSchema, Renderer]]) -> None:
        schemas: dict[str, ComponentSchema] = {}
        renderers: dict[str, Renderer] = {}

        for schema, renderer in components:
            if schema.type in schemas:
                raise ValueError(f"Duplicate component type: {schema.type}")
            if renderer.component_type != schema.type:
                raise ValueError(
                    f"Renderer for '{renderer.component_type}' attached to schema '{schema.type}'"
                )
            schemas[schema.type] = schema
            renderers[schema.type] = renderer

        self._schemas: Mapping[str, ComponentSchema] = MappingProxyType(schemas)
        self._renderers: Mapping[str, Renderer] = MappingProxyType(renderers)
        self._order: tuple[str, ...] = tuple(schemas)

        logger.info("registry_initialized", components=len(self._order), categories=self.list_categories())

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, component_type: object) -> bool:
        return component_type in self._schemas

    def list_all(self) -> list[ComponentSchema]:
        """All schemas in declaration order."""
        return [self._schemas[t] for t in self._order]

    def list_by_category(self, category: str) -> list[ComponentSchema]:
        """Schemas in one category, declaration order; unknown category gives []."""
        return [schema for schema in self.list_all() if schema.category == category]

    def list_categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(schema.category for schema in self.list_all()))

    def get(self, component_type: str) -> ComponentSchema:
        """
        Look up a schema by type.

        Raises:
            UnknownComponentType: If no schema is registered for the type
        """
        try:
            return self._schemas[component_type]
        except KeyError:
            raise UnknownComponentType(component_type) from None

    def renderer(self, component_type: str) -> Renderer:
        """Renderer attached to a type (same failure mode as ``get``)."""
        try:
            return self._renderers[component_type]
        except KeyError:
            raise UnknownComponentType(component_type) from None

    def render(self, component_type: str, values: Mapping[str, Any]) -> VisualOutput:
        """Validate raw literal properties against the schema, then render."""
        props = self.get(component_type).validate_properties(values)
        return self._renderers[component_type].render(props)

    # Must stay below every annotation that uses the builtin list
    list = list_all


def create_registry() -> ComponentRegistry:
    """Build a registry holding the built-in palette."""
    return ComponentRegistry(builtin_components())


@lru_cache
def get_registry() -> ComponentRegistry:
    """Process-wide registry (built once)."""
    return create_registry()


__all__ = ["ComponentRegistry", "create_registry", "get_registry"]
