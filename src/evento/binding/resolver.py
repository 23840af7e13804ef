"""
Template Instance Resolver
Merges a template with a data payload into a VisualTree.

Resolution runs in three passes over the pre-order node list:
    1. bind: substitute every reference/interpolation and validate properties
    2. render: invoke each node's renderer on its validated properties
    3. assemble: build VisualNodes bottom-up (reverse pre-order)

Any binding failure aborts in pass 1, before a single renderer runs, so a
failed resolution never yields a partial tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from returns.result import Failure, Result, Success

from evento.components.properties import ValidatedProperties
from evento.components.registry import ComponentRegistry, get_registry
from evento.core.errors import EventoError, PropertyConstraintViolation, UnboundReference
from evento.document.models import Interpolation, LiteralValue, Reference, Template, TemplateNode
from evento.document.traversal import walk
from evento.document.validation import ensure_valid

from .paths import BindingPath, interpolate
from .visual import VisualNode, VisualTree


class ResolutionErrorKind(str, Enum):
    UNBOUND_REFERENCE = "unbound_reference"
    PROPERTY_CONSTRAINT = "property_constraint"


@dataclass(frozen=True)
class ResolutionError:
    """Failure value of ``resolve``: which node and property could not be bound."""

    kind: ResolutionErrorKind
    node_id: str
    property: str
    message: str
    path: str | None = None
    component_type: str | None = None

    def to_exception(self) -> EventoError:
        if self.kind == ResolutionErrorKind.UNBOUND_REFERENCE:
            return UnboundReference(self.node_id, self.property, self.path or "")
        return PropertyConstraintViolation(self.component_type or "", self.property, None, self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "nodeId": self.node_id,
            "property": self.property,
            "path": self.path,
            "message": self.message,
        }


class _Unbound(Exception):
    """Internal signal carrying the missing path out of an interpolation."""

    def __init__(self, path: str):
        self.path = path


def _lookup(data: Any, path: str) -> Any:
    result = BindingPath.parse(path).lookup(data)
    if isinstance(result, Failure):
        raise _Unbound(path)
    return result.unwrap()


def _bind_node(node: TemplateNode, data: Any) -> Result[dict[str, Any], ResolutionError]:
    """Substitute bound values; literals pass through untouched."""
    raw: dict[str, Any] = {}
    for name, value in node.properties.items():
        try:
            if isinstance(value, LiteralValue):
                raw[name] = value.value
            elif isinstance(value, Reference):
                raw[name] = _lookup(data, value.path)
            elif isinstance(value, Interpolation):
                raw[name] = interpolate(value.text, lambda path: _lookup(data, path))
        except _Unbound as e:
            return Failure(ResolutionError(
                kind=ResolutionErrorKind.UNBOUND_REFERENCE,
                node_id=node.id,
                property=name,
                path=e.path,
                component_type=node.type,
                message=str(UnboundReference(node.id, name, e.path)),
            ))
    return Success(raw)


def resolve(
    template: Template,
    data: Any,
    registry: ComponentRegistry | None = None,
) -> Result[VisualTree, ResolutionError]:
    """
    Resolve a template against a data payload.

    Args:
        template: Template to render (never mutated)
        data: JSON-like payload bindings are looked up in
        registry: Component registry (process-wide one when None)

    Returns:
        Success(VisualTree) mirroring the template's shape, or
        Failure(ResolutionError) for the first node that could not be bound

    Raises:
        UnknownComponentType: If any node type is unregistered
        InvalidTemplate: If the template is structurally invalid
    """
    if registry is None:
        registry = get_registry()
    ensure_valid(template, registry)

    order = [visit.node for visit in walk(template)]

    # Pass 1: bind and validate every node before rendering any
    validated: dict[str, ValidatedProperties] = {}
    for node in order:
        bound = _bind_node(node, data)
        if isinstance(bound, Failure):
            return bound
        try:
            validated[node.id] = registry.get(node.type).validate_properties(bound.unwrap())
        except PropertyConstraintViolation as e:
            return Failure(ResolutionError(
                kind=ResolutionErrorKind.PROPERTY_CONSTRAINT,
                node_id=node.id,
                property=e.property,
                component_type=node.type,
                message=str(e),
            ))

    # Pass 2 + 3: render, then assemble children before parents
    built: dict[str, VisualNode] = {}
    for node in reversed(order):
        schema = registry.get(node.type)
        output = registry.renderer(node.type).render(validated[node.id])
        style = {**schema.default_styles, **output.style, **node.styles}
        built[node.id] = VisualNode(
            id=node.id,
            type=node.type,
            frame=node.frame or schema.default_frame,
            z_index=node.z_index,
            output=output.model_copy(update={"style": style}),
            children=tuple(built[cid] for cid in node.children),
        )

    return Success(VisualTree(
        roots=tuple(built[rid] for rid in template.root_ids),
        node_count=len(order),
    ))


__all__ = ["ResolutionErrorKind", "ResolutionError", "resolve"]
