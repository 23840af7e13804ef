"""
Layout Components
The container is the only component type that owns child nodes.
"""

from ..properties import ConstraintPolicy, PropertyKind, PropertySpec, ValidatedProperties
from ..schema import ComponentCategory, ComponentSchema, Frame
from .base import FILL_BOX, Renderer, VisualOutput, px


CONTAINER_SCHEMA = ComponentSchema(
    type="container",
    name="Container",
    description="A layout container with flex/grid options",
    category=ComponentCategory.LAYOUT.value,
    properties=(
        PropertySpec(
            name="display",
            kind=PropertyKind.ENUM,
            default="flex",
            description="Display type",
            choices=("flex", "grid", "block"),
        ),
        PropertySpec(
            name="flexDirection",
            kind=PropertyKind.ENUM,
            default="column",
            description="Flex direction",
            choices=("row", "column", "row-reverse", "column-reverse"),
        ),
        PropertySpec(
            name="justifyContent",
            kind=PropertyKind.ENUM,
            default="flex-start",
            description="Justify content",
            choices=("flex-start", "flex-end", "center", "space-between", "space-around"),
        ),
        PropertySpec(
            name="alignItems",
            kind=PropertyKind.ENUM,
            default="flex-start",
            description="Align items",
            choices=("flex-start", "flex-end", "center", "stretch"),
        ),
        PropertySpec(
            name="gap",
            kind=PropertyKind.NUMBER,
            default=8,
            description="Gap between items in pixels",
            minimum=0,
            maximum=200,
            policy=ConstraintPolicy.CLAMP,
        ),
        PropertySpec(
            name="backgroundColor",
            kind=PropertyKind.COLOR,
            default="transparent",
            description="Background color",
        ),
    ),
    default_styles={"padding": "16px"},
    default_frame=Frame(width=300, height=200),
)


class ContainerRenderer(Renderer):
    """Flex alignment attributes only apply when display is flex."""

    component_type = "container"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        is_flex = props["display"] == "flex"
        return self.output(
            "div",
            style={
                "display": props["display"],
                "flexDirection": props["flexDirection"] if is_flex else None,
                "justifyContent": props["justifyContent"] if is_flex else None,
                "alignItems": props["alignItems"] if is_flex else None,
                "gap": px(props["gap"]),
                "backgroundColor": props["backgroundColor"],
                **FILL_BOX,
                "overflow": "hidden",
            },
        )


__all__ = ["CONTAINER_SCHEMA", "ContainerRenderer"]
