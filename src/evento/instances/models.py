"""
Template Instance Models
An instance is one resolution of a template against a data payload.

State machine:
    pending -> rendered   (terminal)
    pending -> error      (terminal)
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from evento.binding.resolver import ResolutionError
from evento.core.errors import IllegalTransition
from evento.core.id import new_instance_id
from evento.document.models import utc_now


class InstanceStatus(str, Enum):
    PENDING = "pending"
    RENDERED = "rendered"
    ERROR = "error"

    @property
    def terminal(self) -> bool:
        return self is not InstanceStatus.PENDING


class InstanceError(BaseModel):
    """Diagnostic retained on a failed instance."""

    model_config = ConfigDict(frozen=True)

    kind: str
    message: str
    node_id: str | None = None
    property: str | None = None
    path: str | None = None

    @classmethod
    def from_resolution(cls, error: ResolutionError) -> "InstanceError":
        return cls(
            kind=error.kind.value,
            message=error.message,
            node_id=error.node_id,
            property=error.property,
            path=error.path,
        )


class TemplateInstance(BaseModel):
    """Immutable instance value; transitions return a new model."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_instance_id)
    template_id: str
    template_version: int = 1
    data: dict[str, Any] = Field(default_factory=dict)
    status: InstanceStatus = InstanceStatus.PENDING
    rendered_output: str = ""
    error: InstanceError | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def _require_pending(self, target: InstanceStatus) -> None:
        if self.status is not InstanceStatus.PENDING:
            raise IllegalTransition(self.id, self.status.value, target.value)

    def mark_rendered(self, rendered_output: str) -> "TemplateInstance":
        """
        pending -> rendered.

        Raises:
            IllegalTransition: If the instance is already terminal
        """
        self._require_pending(InstanceStatus.RENDERED)
        return self.model_copy(update={
            "status": InstanceStatus.RENDERED,
            "rendered_output": rendered_output,
            "updated_at": utc_now(),
        })

    def mark_failed(self, error: InstanceError) -> "TemplateInstance":
        """
        pending -> error. The output stays empty.

        Raises:
            IllegalTransition: If the instance is already terminal
        """
        self._require_pending(InstanceStatus.ERROR)
        return self.model_copy(update={
            "status": InstanceStatus.ERROR,
            "error": error,
            "updated_at": utc_now(),
        })


__all__ = ["InstanceStatus", "InstanceError", "TemplateInstance"]
