"""
Template Validation
Structural checks of a template against the component registry.

All violations are collected so callers can report them together;
``ensure_valid`` turns a non-empty result into an exception.
"""

from collections import Counter
from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from evento.components.properties import ConstraintPolicy, coerce_value
from evento.components.registry import ComponentRegistry
from evento.core.errors import InvalidTemplate, PropertyConstraintViolation, UnknownComponentType
from evento.core.logging_config import get_logger

from .models import LiteralValue, Template
from .traversal import find_back_edges, walk

logger = get_logger(__name__)


class ViolationKind(str, Enum):
    UNKNOWN_TYPE = "unknown_type"
    UNDECLARED_PROPERTY = "undeclared_property"
    ILLEGAL_CHILDREN = "illegal_children"
    MISSING_CHILD = "missing_child"
    SHARED_CHILD = "shared_child"
    CYCLE = "cycle"
    ORPHAN_NODE = "orphan_node"
    MISSING_ROOT = "missing_root"
    TOO_MANY_NODES = "too_many_nodes"
    DUPLICATE_ID = "duplicate_id"
    INVALID_BINDING = "invalid_binding"
    CONSTRAINT = "constraint"


class Violation(BaseModel):
    """One structural problem found in a template."""

    model_config = ConfigDict(frozen=True)

    kind: ViolationKind
    message: str
    node_id: str | None = None
    property: str | None = None
    component_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "nodeId": self.node_id,
            "property": self.property,
        }


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    violations: tuple[Violation, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        return self.valid

    def of_kind(self, kind: ViolationKind) -> list[Violation]:
        return [v for v in self.violations if v.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "violations": [v.to_dict() for v in self.violations]}


def _check_node_properties(template: Template, node_id: str, registry: ComponentRegistry) -> list[Violation]:
    node = template.nodes[node_id]
    if node.type not in registry:
        return [Violation(
            kind=ViolationKind.UNKNOWN_TYPE,
            node_id=node.id,
            component_type=node.type,
            message=f"Unknown component type '{node.type}' on node {node.id}",
        )]

    schema = registry.get(node.type)
    found: list[Violation] = []

    for name, value in node.properties.items():
        spec = schema.get_property(name)
        if spec is None:
            found.append(Violation(
                kind=ViolationKind.UNDECLARED_PROPERTY,
                node_id=node.id,
                property=name,
                message=f"Property '{name}' is not declared on '{node.type}' (node {node.id})",
            ))
            continue
        # Literals under a reject policy can be refused before any data arrives
        if isinstance(value, LiteralValue) and spec.policy == ConstraintPolicy.REJECT:
            try:
                coerce_value(spec, node.type, value.value)
            except PropertyConstraintViolation as e:
                found.append(Violation(
                    kind=ViolationKind.CONSTRAINT,
                    node_id=node.id,
                    property=name,
                    message=str(e),
                ))

    if node.children:
        if not schema.is_container:
            found.append(Violation(
                kind=ViolationKind.ILLEGAL_CHILDREN,
                node_id=node.id,
                message=f"'{node.type}' cannot have children (node {node.id})",
            ))
        for child_id in node.children:
            if child_id not in template.nodes:
                found.append(Violation(
                    kind=ViolationKind.MISSING_CHILD,
                    node_id=node.id,
                    message=f"Node {node.id} references missing child '{child_id}'",
                ))

    return found


def validate(template: Template, registry: ComponentRegistry, max_nodes: int | None = None) -> ValidationResult:
    """
    Check a template against the registry.

    Node checks run in pre-order from the roots, then over unreachable
    nodes in arena order, so the violation list is deterministic.

    Args:
        template: Template to check
        registry: Component registry
        max_nodes: Optional upper bound on arena size

    Returns:
        ValidationResult holding every violation found
    """
    violations: list[Violation] = []

    if max_nodes is not None and template.node_count > max_nodes:
        violations.append(Violation(
            kind=ViolationKind.TOO_MANY_NODES,
            message=f"Template has {template.node_count} nodes (limit {max_nodes})",
        ))

    for rid in template.root_ids:
        if rid not in template.nodes:
            violations.append(Violation(
                kind=ViolationKind.MISSING_ROOT,
                node_id=rid,
                message=f"Root '{rid}' is not in the node set",
            ))

    reachable = [visit.node.id for visit in walk(template)]
    seen = set(reachable)
    unreachable = [nid for nid in template.nodes if nid not in seen]

    for node_id in reachable + unreachable:
        violations.extend(_check_node_properties(template, node_id, registry))

    # Every node has at most one owner (a parent or the root list)
    owners = Counter(template.root_ids)
    for node in template.nodes.values():
        owners.update(node.children)
    for node_id, count in owners.items():
        if count > 1 and node_id in template.nodes:
            violations.append(Violation(
                kind=ViolationKind.SHARED_CHILD,
                node_id=node_id,
                message=f"Node {node_id} is referenced {count} times",
            ))

    for parent_id, child_id in find_back_edges(template):
        violations.append(Violation(
            kind=ViolationKind.CYCLE,
            node_id=parent_id,
            message=f"Cycle: node {parent_id} leads back to ancestor {child_id}",
        ))

    for node_id in unreachable:
        violations.append(Violation(
            kind=ViolationKind.ORPHAN_NODE,
            node_id=node_id,
            message=f"Node {node_id} is not reachable from any root",
        ))

    if violations:
        logger.debug("template_invalid", template_id=template.id, violations=len(violations))
    return ValidationResult(violations=tuple(violations))


def raise_for_violations(violations: Sequence[Violation]) -> None:
    """Raise UnknownComponentType when any type is unknown, InvalidTemplate otherwise."""
    if not violations:
        return
    unknown = [v for v in violations if v.kind == ViolationKind.UNKNOWN_TYPE]
    if unknown:
        raise UnknownComponentType(unknown[0].component_type or "", violations=violations)
    raise InvalidTemplate(violations)


def ensure_valid(template: Template, registry: ComponentRegistry, max_nodes: int | None = None) -> None:
    """
    Validate and stop hard on any violation.

    Raises:
        UnknownComponentType: If any node has an unregistered type (carries all violations)
        InvalidTemplate: For any other violation
    """
    raise_for_violations(validate(template, registry, max_nodes).violations)


__all__ = [
    "ViolationKind",
    "Violation",
    "ValidationResult",
    "validate",
    "raise_for_violations",
    "ensure_valid",
]
