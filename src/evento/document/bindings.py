"""Binding extraction: which data paths a template needs."""

from .models import Template
from .traversal import walk


def collect_bindings(template: Template) -> list[str]:
    """
    Distinct binding paths in traversal order.

    Nodes are visited pre-order; within a node, properties in declared
    order; within an interpolation, expressions left to right.
    """
    paths: dict[str, None] = {}
    for visit in walk(template):
        for value in visit.node.bindings.values():
            for path in value.paths:
                paths.setdefault(path, None)
    return list(paths)


def bindings_by_node(template: Template) -> dict[str, dict[str, list[str]]]:
    """node id -> property -> paths, for nodes that carry any binding."""
    result: dict[str, dict[str, list[str]]] = {}
    for visit in walk(template):
        bound = visit.node.bindings
        if bound:
            result[visit.node.id] = {name: value.paths for name, value in bound.items()}
    return result


__all__ = ["collect_bindings", "bindings_by_node"]
