"""Renderer contract and visual output model."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..properties import ValidatedProperties

StyleValue = str | int | float | bool


class VisualOutput(BaseModel):
    """
    Declarative description of one rendered node.

    Presentation layers treat this as data (element, text, attributes,
    style); nothing in it is ever executed.
    """

    model_config = ConfigDict(frozen=True)

    component: str = Field(..., description="Component type that produced the output")
    element: str = Field(..., description="Element kind, e.g. div, h1, img, svg")
    text: str | None = Field(default=None, description="Text content, if any")
    attributes: dict[str, StyleValue] = Field(default_factory=dict)
    style: dict[str, StyleValue] = Field(default_factory=dict)


class Renderer(ABC):
    """
    Pure mapping from a validated property set to a VisualOutput.

    Implementations must not read instance data, the clock, or any
    random source: identical properties always give identical output.
    """

    component_type: ClassVar[str]

    @abstractmethod
    def render(self, props: ValidatedProperties) -> VisualOutput:
        """Render one node."""
        ...

    def output(self, element: str, *, text: str | None = None,
               attributes: dict[str, Any] | None = None,
               style: dict[str, Any] | None = None) -> VisualOutput:
        """Build a VisualOutput for this renderer's component type, dropping None values."""
        return VisualOutput(
            component=self.component_type,
            element=element,
            text=text,
            attributes={k: v for k, v in (attributes or {}).items() if v is not None},
            style={k: v for k, v in (style or {}).items() if v is not None},
        )


def px(value: int | float) -> str:
    """Format a pixel length: 16 -> '16px', 1.5 -> '1.5px'."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}px"


FILL_BOX: dict[str, str] = {"width": "100%", "height": "100%"}


__all__ = ["StyleValue", "VisualOutput", "Renderer", "px", "FILL_BOX"]
