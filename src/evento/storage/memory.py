"""In-memory repositories (thread-safe)."""

import threading

from evento.core.errors import NotFound
from evento.core.id import is_instance_id, is_template_id
from evento.core.logging_config import get_logger
from evento.document.models import Template
from evento.instances.models import InstanceStatus, TemplateInstance

from .protocol import Page, TemplateQuery

logger = get_logger(__name__)


class InMemoryTemplateRepository:
    """Template store keyed by id; listing is newest-first."""

    def __init__(self) -> None:
        self._items: dict[str, Template] = {}
        self._lock = threading.Lock()

    def add(self, template: Template) -> Template:
        with self._lock:
            if template.id in self._items:
                raise ValueError(f"Template already exists: {template.id}")
            self._items[template.id] = template
        logger.debug("template_stored", template_id=template.id)
        return template

    def get(self, template_id: str) -> Template:
        if not is_template_id(template_id):
            raise NotFound("template", template_id)
        with self._lock:
            template = self._items.get(template_id)
        if template is None:
            raise NotFound("template", template_id)
        return template

    def update(self, template: Template) -> Template:
        with self._lock:
            if template.id not in self._items:
                raise NotFound("template", template.id)
            self._items[template.id] = template
        return template

    def delete(self, template_id: str) -> None:
        with self._lock:
            if self._items.pop(template_id, None) is None:
                raise NotFound("template", template_id)

    def list(self, query: TemplateQuery | None = None) -> Page:
        query = query or TemplateQuery()
        with self._lock:
            items = list(self._items.values())

        if query.status is not None:
            items = [t for t in items if t.status == query.status]
        if query.category is not None:
            items = [t for t in items if t.category == query.category]
        if query.search:
            needle = query.search.lower()
            items = [t for t in items if needle in t.name.lower() or needle in t.description.lower()]

        items.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        start = (query.page - 1) * query.limit
        return Page(items=items[start:start + query.limit], total=len(items), page=query.page, limit=query.limit)

    def count(self) -> int:
        with self._lock:
            return len(self._items)


class InMemoryInstanceRepository:
    def __init__(self) -> None:
        self._items: dict[str, TemplateInstance] = {}
        self._lock = threading.Lock()

    def add(self, instance: TemplateInstance) -> TemplateInstance:
        with self._lock:
            if instance.id in self._items:
                raise ValueError(f"Instance already exists: {instance.id}")
            self._items[instance.id] = instance
        return instance

    def get(self, instance_id: str) -> TemplateInstance:
        if not is_instance_id(instance_id):
            raise NotFound("instance", instance_id)
        with self._lock:
            instance = self._items.get(instance_id)
        if instance is None:
            raise NotFound("instance", instance_id)
        return instance

    def update(self, instance: TemplateInstance) -> TemplateInstance:
        with self._lock:
            if instance.id not in self._items:
                raise NotFound("instance", instance.id)
            self._items[instance.id] = instance
        return instance

    def delete(self, instance_id: str) -> None:
        with self._lock:
            if self._items.pop(instance_id, None) is None:
                raise NotFound("instance", instance_id)

    def list(
        self,
        template_id: str | None = None,
        status: InstanceStatus | None = None,
    ) -> list[TemplateInstance]:
        with self._lock:
            items = list(self._items.values())
        if template_id is not None:
            items = [i for i in items if i.template_id == template_id]
        if status is not None:
            items = [i for i in items if i.status == status]
        return sorted(items, key=lambda i: (i.created_at, i.id), reverse=True)

    def delete_for_template(self, template_id: str) -> int:
        with self._lock:
            doomed = [iid for iid, inst in self._items.items() if inst.template_id == template_id]
            for iid in doomed:
                del self._items[iid]
        if doomed:
            logger.info("instances_deleted", template_id=template_id, count=len(doomed))
        return len(doomed)


__all__ = ["InMemoryTemplateRepository", "InMemoryInstanceRepository"]
