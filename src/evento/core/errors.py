"""Engine error hierarchy."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from evento.document.validation import Violation


class EventoError(Exception):
    """Base class for all engine errors."""

    pass


class UnknownComponentType(EventoError, LookupError):
    """No schema is registered for a component type."""

    def __init__(self, component_type: str, violations: "Sequence[Violation] | None" = None) -> None:
        super().__init__(f"Unknown component type: {component_type}")
        self.component_type = component_type
        self.violations = list(violations or [])


class InvalidTemplate(EventoError):
    """Template failed structural validation."""

    def __init__(self, violations: "Sequence[Violation]") -> None:
        self.violations = list(violations)
        count = len(self.violations)
        first = self.violations[0].message if self.violations else "no details"
        suffix = f" (+{count - 1} more)" if count > 1 else ""
        super().__init__(f"Invalid template: {first}{suffix}")


class UnboundReference(EventoError):
    """A data binding path was not found in the payload."""

    def __init__(self, node_id: str, property: str, path: str) -> None:
        super().__init__(f"Unbound reference '{path}' in {node_id}.{property}")
        self.node_id = node_id
        self.property = property
        self.path = path


class PropertyConstraintViolation(EventoError):
    """A property value is outside a domain whose policy is reject."""

    def __init__(self, component_type: str, property: str, value: Any, reason: str) -> None:
        super().__init__(f"{component_type}.{property}: {reason}")
        self.component_type = component_type
        self.property = property
        self.value = value
        self.reason = reason


class IllegalTransition(EventoError):
    """Instance lifecycle transition is not permitted."""

    def __init__(self, instance_id: str, current: str, target: str) -> None:
        super().__init__(f"Instance {instance_id} cannot move from {current} to {target}")
        self.instance_id = instance_id
        self.current = current
        self.target = target


class NotFound(EventoError):
    """Persisted entity does not exist."""

    def __init__(self, kind: str, id: str) -> None:
        super().__init__(f"{kind.capitalize()} not found: {id}")
        self.kind = kind
        self.id = id


class RequestValidationError(EventoError):
    """Request payload rejected before reaching the engine."""

    pass


__all__ = [
    "EventoError",
    "UnknownComponentType",
    "InvalidTemplate",
    "UnboundReference",
    "PropertyConstraintViolation",
    "IllegalTransition",
    "NotFound",
    "RequestValidationError",
]
