"""HTTP request and response models (camelCase on the wire)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from evento.instances.models import InstanceStatus, TemplateInstance
from evento.storage.protocol import Page


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Requests
# ============================================================================


class RenderRequest(CamelModel):
    """Data payload for a new instance."""

    data: dict[str, Any] = Field(default_factory=dict)


class PreviewRequest(CamelModel):
    """Preview with a named preview set, or with explicit data."""

    preview_name: str | None = None
    data: dict[str, Any] | None = None


# ============================================================================
# Responses
# ============================================================================


class InstanceErrorResponse(CamelModel):
    kind: str
    message: str
    node_id: str | None = None
    property: str | None = None
    path: str | None = None


class InstanceResponse(CamelModel):
    instance_id: str
    template_id: str
    template_version: int
    status: InstanceStatus
    rendered_output: str
    data: dict[str, Any]
    error: InstanceErrorResponse | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_instance(cls, instance: TemplateInstance) -> "InstanceResponse":
        return cls(
            instance_id=instance.id,
            template_id=instance.template_id,
            template_version=instance.template_version,
            status=instance.status,
            rendered_output=instance.rendered_output,
            data=instance.data,
            error=instance.error.model_dump() if instance.error else None,
            created_at=instance.created_at,
            updated_at=instance.updated_at,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class TemplateListResponse(CamelModel):
    templates: list[dict[str, Any]]
    pagination: Pagination

    @classmethod
    def from_page(cls, page: Page) -> "TemplateListResponse":
        return cls(
            templates=[t.to_wire() for t in page.items],
            pagination=Pagination(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
        )


__all__ = [
    "CamelModel",
    "RenderRequest",
    "PreviewRequest",
    "InstanceErrorResponse",
    "InstanceResponse",
    "Pagination",
    "TemplateListResponse",
]
