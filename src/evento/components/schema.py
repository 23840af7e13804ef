"""Component Schema Definitions."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .properties import PropertySpec, ValidatedProperties, coerce_properties


class ComponentCategory(str, Enum):
    """Component groupings for the builder palette."""

    CONTENT = "content"
    MEDIA = "media"
    LAYOUT = "layout"
    DECORATIVE = "decorative"
    CUSTOM = "custom"


# Only these categories may own child nodes
CONTAINER_CATEGORIES = frozenset({ComponentCategory.LAYOUT.value})


class Frame(BaseModel):
    """Placement box of a node on the template canvas (pixels)."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    width: int = Field(default=100, ge=0)
    height: int = Field(default=100, ge=0)


class ComponentSchema(BaseModel):
    """Identity and property contract of one component type."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Unique component type identifier")
    name: str
    description: str = ""
    category: str
    properties: tuple[PropertySpec, ...] = Field(default_factory=tuple)
    default_styles: dict[str, str | int | float] = Field(default_factory=dict)
    default_frame: Frame = Field(default_factory=Frame)

    @property
    def is_container(self) -> bool:
        """Whether nodes of this type may have children."""
        return self.category in CONTAINER_CATEGORIES

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.properties)

    def get_property(self, name: str) -> PropertySpec | None:
        """Look up a declared property by name."""
        for spec in self.properties:
            if spec.name == name:
                return spec
        return None

    def defaults(self) -> dict[str, Any]:
        """Declared default for every property, in declaration order."""
        return {spec.name: spec.default for spec in self.properties}

    def validate_properties(self, values: Mapping[str, Any]) -> ValidatedProperties:
        """Apply defaults and declared policies to a raw property set."""
        return coerce_properties(self.type, self.properties, values)

    def to_dict(self) -> dict[str, Any]:
        """Export schema for API responses."""
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "container": self.is_container,
            "defaultProps": self.defaults(),
            "defaultStyles": dict(self.default_styles),
            "defaultPosition": self.default_frame.model_dump(),
            "properties": {spec.name: spec.to_dict() for spec in self.properties},
            "required": [spec.name for spec in self.properties if spec.required],
        }


__all__ = [
    "ComponentCategory",
    "CONTAINER_CATEGORIES",
    "Frame",
    "ComponentSchema",
]
