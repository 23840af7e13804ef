"""
Visual Tree
Resolved output of a template: one VisualNode per template node, same shape.
"""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from evento.components.renderers.base import VisualOutput
from evento.components.schema import Frame
from evento.core.json import canonical_dumps, loads


class VisualNode(BaseModel):
    """Rendered counterpart of one template node."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    frame: Frame
    z_index: int = 0
    output: VisualOutput
    children: tuple["VisualNode", ...] = Field(default_factory=tuple)


class VisualTree(BaseModel):
    """Ordered root nodes of a resolved template."""

    model_config = ConfigDict(frozen=True)

    roots: tuple[VisualNode, ...] = Field(default_factory=tuple)
    node_count: int = 0

    def iter_nodes(self) -> Iterator[VisualNode]:
        """Pre-order iteration, children in declared order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: str) -> VisualNode | None:
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Canonical serialization: sorted keys, byte-identical for equal trees."""
        return canonical_dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> "VisualTree":
        return cls.model_validate(loads(text))


VisualNode.model_rebuild()


__all__ = ["VisualNode", "VisualTree"]
