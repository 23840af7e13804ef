"""Template revision helpers. Templates are immutable; each helper returns a new one."""

from typing import Any

from evento.core.id import new_template_id

from .models import Template, TemplateStatus, utc_now

COPY_SUFFIX = " (Copy)"


def revise(template: Template, **changes: Any) -> Template:
    """
    Apply changes as a new revision.

    Bumps ``version`` and refreshes ``updated_at``; id and creation time are kept.
    """
    changes.pop("id", None)
    changes.pop("created_at", None)
    changes.pop("version", None)
    data = template.model_dump()
    data.update(changes)
    data["version"] = template.version + 1
    data["updated_at"] = utc_now()
    return Template.model_validate(data)


def duplicate(template: Template) -> Template:
    """Copy under a new id as a fresh draft at version 1."""
    now = utc_now()
    return template.model_copy(update={
        "id": new_template_id(),
        "name": f"{template.name}{COPY_SUFFIX}",
        "status": TemplateStatus.DRAFT,
        "version": 1,
        "created_at": now,
        "updated_at": now,
    })


def _with_status(template: Template, status: TemplateStatus) -> Template:
    return template.model_copy(update={"status": status, "updated_at": utc_now()})


def publish(template: Template) -> Template:
    return _with_status(template, TemplateStatus.PUBLISHED)


def unpublish(template: Template) -> Template:
    return _with_status(template, TemplateStatus.DRAFT)


def archive(template: Template) -> Template:
    return _with_status(template, TemplateStatus.ARCHIVED)


__all__ = ["COPY_SUFFIX", "revise", "duplicate", "publish", "unpublish", "archive"]
