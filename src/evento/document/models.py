"""
Template Document Models
Templates are arenas: a flat id -> node store with children referenced by id.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from evento.binding.paths import BindingPath, BindingPathError, interpolation_paths
from evento.components.schema import Frame
from evento.core.id import new_template_id


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Property Values
# ============================================================================


class LiteralValue(BaseModel):
    """Property value fixed in the template."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    value: Any = None

    def to_wire(self) -> Any:
        return self.value


class Reference(BaseModel):
    """Property value taken whole from the instance data."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference"] = "reference"
    path: str

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str) -> str:
        try:
            return BindingPath.parse(v).raw
        except BindingPathError as e:
            raise ValueError(str(e)) from e

    @property
    def paths(self) -> list[str]:
        return [self.path]

    def to_wire(self) -> Any:
        return {"$ref": self.path}


class Interpolation(BaseModel):
    """Text value with embedded {{path}} expressions."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["interpolation"] = "interpolation"
    text: str

    @field_validator("text")
    @classmethod
    def _check_paths(cls, v: str) -> str:
        found = interpolation_paths(v)
        if not found:
            raise ValueError("interpolation has no {{path}} expression")
        for path in found:
            try:
                BindingPath.parse(path)
            except BindingPathError as e:
                raise ValueError(str(e)) from e
        return v

    @property
    def paths(self) -> list[str]:
        return interpolation_paths(self.text)

    def to_wire(self) -> Any:
        return self.text


PropertyValue = Annotated[Union[LiteralValue, Reference, Interpolation], Field(discriminator="kind")]
"""Tagged variant: literal, whole-value reference, or interpolated text."""


def is_binding(value: PropertyValue) -> bool:
    return not isinstance(value, LiteralValue)


# ============================================================================
# Nodes and Templates
# ============================================================================


class TemplateStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class TemplateCategory(str, Enum):
    WEDDING = "wedding"
    BIRTHDAY = "birthday"
    CORPORATE = "corporate"
    BABY_SHOWER = "baby_shower"
    ANNIVERSARY = "anniversary"
    OTHER = "other"


class TemplateNode(BaseModel):
    """One component node; children are ids into the owning template's arena."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    properties: dict[str, PropertyValue] = Field(default_factory=dict)
    children: tuple[str, ...] = Field(default_factory=tuple)
    frame: Frame | None = Field(default=None, description="None means the schema's default frame")
    z_index: int = 0
    styles: dict[str, str | int | float] = Field(default_factory=dict)

    @property
    def bindings(self) -> dict[str, Reference | Interpolation]:
        return {name: v for name, v in self.properties.items() if is_binding(v)}

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "properties": {name: v.to_wire() for name, v in self.properties.items()},
            "children": list(self.children),
            "zIndex": self.z_index,
            "styles": dict(self.styles),
        }
        if self.frame is not None:
            data["frame"] = self.frame.model_dump()
        return data


class Template(BaseModel):
    """
    Persisted template document.

    ``nodes`` is the arena (keyed by node id); ``root_ids`` orders the
    top-level nodes. Structural rules (known types, container-only
    children, no cycles or sharing) are checked by
    ``evento.document.validation``, not here.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_template_id)
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: TemplateCategory = TemplateCategory.OTHER
    status: TemplateStatus = TemplateStatus.DRAFT
    version: int = Field(default=1, ge=1)
    nodes: dict[str, TemplateNode] = Field(default_factory=dict)
    root_ids: tuple[str, ...] = Field(default_factory=tuple)
    preview_data: dict[str, dict[str, Any]] = Field(default_factory=dict)
    thumbnail: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _arena_keys_match_ids(self) -> "Template":
        for key, node in self.nodes.items():
            if key != node.id:
                raise ValueError(f"arena key '{key}' does not match node id '{node.id}'")
        return self

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def node(self, node_id: str) -> TemplateNode | None:
        return self.nodes.get(node_id)

    def roots(self) -> list[TemplateNode]:
        return [self.nodes[rid] for rid in self.root_ids if rid in self.nodes]

    def to_wire(self) -> dict[str, Any]:
        """Arena wire format (camelCase keys), accepted back by the parser."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "status": self.status.value,
            "version": self.version,
            "nodes": {nid: node.to_wire() for nid, node in self.nodes.items()},
            "rootIds": list(self.root_ids),
            "previewData": self.preview_data,
            "thumbnail": self.thumbnail,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


__all__ = [
    "utc_now",
    "LiteralValue",
    "Reference",
    "Interpolation",
    "PropertyValue",
    "is_binding",
    "TemplateStatus",
    "TemplateCategory",
    "TemplateNode",
    "Template",
]
