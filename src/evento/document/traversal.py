"""
Tree Traversal
Iterative depth-first, pre-order walks over a template arena.

Children are visited in declared order. Walks use an explicit stack and a
visited set, so a malformed arena (cycles, shared or missing children)
terminates instead of recursing without bound.
"""

from collections.abc import Iterator
from typing import NamedTuple

from .models import Template, TemplateNode


class Visit(NamedTuple):
    node: TemplateNode
    parent_id: str | None
    depth: int


def walk(template: Template) -> Iterator[Visit]:
    """Pre-order walk from the roots; each reachable node is yielded once."""
    visited: set[str] = set()
    stack: list[tuple[str, str | None, int]] = [(rid, None, 0) for rid in reversed(template.root_ids)]

    while stack:
        node_id, parent_id, depth = stack.pop()
        if node_id in visited:
            continue
        node = template.nodes.get(node_id)
        if node is None:
            continue
        visited.add(node_id)
        yield Visit(node, parent_id, depth)
        stack.extend((cid, node_id, depth + 1) for cid in reversed(node.children))


def preorder(template: Template) -> list[TemplateNode]:
    return [visit.node for visit in walk(template)]


def reachable_ids(template: Template) -> set[str]:
    return {visit.node.id for visit in walk(template)}


def find_back_edges(template: Template) -> list[tuple[str, str]]:
    """
    (parent, child) edges that close a cycle, in discovery order.

    Every node is used as a start point, so cycles among unreachable
    nodes are found too.
    """
    WHITE, GRAY, BLACK = 0, 1, 2
    color = dict.fromkeys(template.nodes, WHITE)
    back_edges: list[tuple[str, str]] = []
    starts = list(template.root_ids) + [nid for nid in template.nodes if nid not in template.root_ids]

    for start in starts:
        if color.get(start, BLACK) != WHITE:
            continue
        color[start] = GRAY
        stack: list[tuple[str, Iterator[str]]] = [(start, iter(template.nodes[start].children))]

        while stack:
            node_id, children = stack[-1]
            child = next(children, None)
            if child is None:
                color[node_id] = BLACK
                stack.pop()
                continue
            state = color.get(child)
            if state == GRAY:
                back_edges.append((node_id, child))
            elif state == WHITE:
                color[child] = GRAY
                stack.append((child, iter(template.nodes[child].children)))

    return back_edges


__all__ = ["Visit", "walk", "preorder", "reachable_ids", "find_back_edges"]
