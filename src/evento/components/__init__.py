"""
Components
Schemas, property contracts, renderers, and the registry tying them together.
"""

from .properties import (
    ConstraintPolicy,
    PropertyKind,
    PropertySpec,
    ValidatedProperties,
    coerce_properties,
    coerce_value,
)
from .registry import ComponentRegistry, create_registry, get_registry
from .renderers import Renderer, VisualOutput, builtin_components
from .schema import CONTAINER_CATEGORIES, ComponentCategory, ComponentSchema, Frame

__all__ = [
    "ConstraintPolicy",
    "PropertyKind",
    "PropertySpec",
    "ValidatedProperties",
    "coerce_properties",
    "coerce_value",
    "ComponentRegistry",
    "create_registry",
    "get_registry",
    "Renderer",
    "VisualOutput",
    "builtin_components",
    "CONTAINER_CATEGORIES",
    "ComponentCategory",
    "ComponentSchema",
    "Frame",
]
