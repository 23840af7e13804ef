"""Persistence interfaces the engine needs from a storage backend."""

from typing import Protocol

from pydantic import BaseModel, Field

from evento.document.models import Template, TemplateCategory, TemplateStatus
from evento.instances.models import InstanceStatus, TemplateInstance


class TemplateQuery(BaseModel):
    """Filters and pagination for template listings."""

    status: TemplateStatus | None = None
    category: TemplateCategory | None = None
    search: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class Page(BaseModel):
    items: list[Template]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit


class TemplateRepository(Protocol):
    def add(self, template: Template) -> Template: ...

    def get(self, template_id: str) -> Template:
        """Raises NotFound when absent."""
        ...

    def update(self, template: Template) -> Template: ...

    def delete(self, template_id: str) -> None: ...

    def list(self, query: TemplateQuery | None = None) -> Page: ...

    def count(self) -> int: ...


class InstanceRepository(Protocol):
    def add(self, instance: TemplateInstance) -> TemplateInstance: ...

    def get(self, instance_id: str) -> TemplateInstance:
        """Raises NotFound when absent."""
        ...

    def update(self, instance: TemplateInstance) -> TemplateInstance: ...

    def delete(self, instance_id: str) -> None: ...

    def list(
        self,
        template_id: str | None = None,
        status: InstanceStatus | None = None,
    ) -> list[TemplateInstance]: ...

    def delete_for_template(self, template_id: str) -> int: ...


__all__ = ["TemplateQuery", "Page", "TemplateRepository", "InstanceRepository"]
