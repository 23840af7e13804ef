"""
Decorative Components
Dividers and shapes.
"""

from ..properties import ConstraintPolicy, PropertyKind, PropertySpec, ValidatedProperties
from ..schema import ComponentCategory, ComponentSchema, Frame
from .base import FILL_BOX, Renderer, VisualOutput, px


DIVIDER_SCHEMA = ComponentSchema(
    type="divider",
    name="Divider",
    description="A horizontal or vertical divider line",
    category=ComponentCategory.DECORATIVE.value,
    properties=(
        PropertySpec(
            name="orientation",
            kind=PropertyKind.ENUM,
            default="horizontal",
            description="Divider orientation",
            choices=("horizontal", "vertical"),
        ),
        PropertySpec(
            name="thickness",
            kind=PropertyKind.NUMBER,
            default=1,
            description="Line thickness in pixels",
            minimum=1,
            maximum=50,
            policy=ConstraintPolicy.CLAMP,
        ),
        PropertySpec(name="color", kind=PropertyKind.COLOR, default="#cccccc", description="Line color (hex)"),
        PropertySpec(
            name="style",
            kind=PropertyKind.ENUM,
            default="solid",
            description="Line style",
            choices=("solid", "dashed", "dotted"),
        ),
    ),
    default_frame=Frame(width=200, height=2),
)


SHAPE_SCHEMA = ComponentSchema(
    type="shape",
    name="Shape",
    description="A decorative shape element",
    category=ComponentCategory.DECORATIVE.value,
    properties=(
        PropertySpec(
            name="shape",
            kind=PropertyKind.ENUM,
            default="rectangle",
            description="Shape type",
            choices=("rectangle", "circle", "ellipse"),
        ),
        PropertySpec(name="backgroundColor", kind=PropertyKind.COLOR, default="#f0f0f0", description="Fill color"),
        PropertySpec(name="borderColor", kind=PropertyKind.COLOR, default="#cccccc", description="Border color"),
        PropertySpec(
            name="borderWidth",
            kind=PropertyKind.NUMBER,
            default=1,
            description="Border width in pixels",
            minimum=0,
            maximum=50,
            policy=ConstraintPolicy.CLAMP,
        ),
        PropertySpec(
            name="borderRadius",
            kind=PropertyKind.NUMBER,
            default=0,
            description="Border radius in pixels",
            minimum=0,
            maximum=1000,
            policy=ConstraintPolicy.CLAMP,
        ),
    ),
    default_frame=Frame(width=100, height=100),
)


class DividerRenderer(Renderer):
    """Solid dividers are a filled bar; dashed and dotted ones are a border."""

    component_type = "divider"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        horizontal = props["orientation"] == "horizontal"
        thickness = px(props["thickness"])
        color = props["color"]
        line_style = props["style"]

        style: dict[str, str] = {
            "width": "100%" if horizontal else thickness,
            "height": thickness if horizontal else "100%",
        }
        if line_style == "solid":
            style["backgroundColor"] = color
        else:
            style.update(
                backgroundColor="transparent",
                borderStyle=line_style,
                borderColor=color,
                borderWidth=thickness,
            )
            style["borderTopWidth" if horizontal else "borderLeftWidth"] = thickness

        return self.output("div", attributes={"orientation": props["orientation"]}, style=style)


class ShapeRenderer(Renderer):
    component_type = "shape"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        if props["shape"] in ("circle", "ellipse"):
            radius = "50%"
        else:
            radius = px(props["borderRadius"])

        return self.output(
            "div",
            attributes={"shape": props["shape"]},
            style={
                **FILL_BOX,
                "backgroundColor": props["backgroundColor"],
                "border": f"{px(props['borderWidth'])} solid {props['borderColor']}",
                "borderRadius": radius,
            },
        )


__all__ = ["DIVIDER_SCHEMA", "SHAPE_SCHEMA", "DividerRenderer", "ShapeRenderer"]
