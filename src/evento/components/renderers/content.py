"""
Content Components
Text blocks and headings.
"""

from ..properties import ConstraintPolicy, PropertyKind, PropertySpec, ValidatedProperties
from ..schema import ComponentCategory, ComponentSchema, Frame
from .base import FILL_BOX, Renderer, VisualOutput, px

# Heading level -> font size
HEADING_FONT_SIZES: dict[int, str] = {
    1: "2rem",
    2: "1.75rem",
    3: "1.5rem",
    4: "1.25rem",
    5: "1rem",
    6: "0.875rem",
}

_FONT_FAMILY = PropertySpec(name="fontFamily", kind=PropertyKind.TEXT, default="Arial", description="Font family")
_COLOR = PropertySpec(name="color", kind=PropertyKind.COLOR, default="#000000", description="Text color (hex)")


TEXT_SCHEMA = ComponentSchema(
    type="text",
    name="Text Block",
    description="A text element with customizable font, size, and color",
    category=ComponentCategory.CONTENT.value,
    properties=(
        PropertySpec(
            name="content",
            kind=PropertyKind.TEXT,
            default="Enter text here",
            description="Text content (supports {{variables}})",
            required=True,
        ),
        PropertySpec(
            name="fontSize",
            kind=PropertyKind.NUMBER,
            default=16,
            description="Font size in pixels",
            minimum=8,
            maximum=200,
            policy=ConstraintPolicy.CLAMP,
        ),
        PropertySpec(
            name="fontWeight",
            kind=PropertyKind.ENUM,
            default="normal",
            description="Font weight",
            choices=("normal", "bold", "lighter"),
        ),
        _FONT_FAMILY,
        PropertySpec(
            name="textAlign",
            kind=PropertyKind.ENUM,
            default="left",
            description="Text alignment",
            choices=("left", "center", "right", "justify"),
        ),
        _COLOR,
    ),
    default_styles={"padding": "8px"},
    default_frame=Frame(width=200, height=50),
)


HEADING_SCHEMA = ComponentSchema(
    type="heading",
    name="Heading",
    description="A heading element with configurable level",
    category=ComponentCategory.CONTENT.value,
    properties=(
        PropertySpec(
            name="content",
            kind=PropertyKind.TEXT,
            default="Heading",
            description="Heading text (supports {{variables}})",
            required=True,
        ),
        PropertySpec(
            name="level",
            kind=PropertyKind.INTEGER,
            default=1,
            description="Heading level (1-6)",
            minimum=1,
            maximum=6,
            policy=ConstraintPolicy.CLAMP,
        ),
        _FONT_FAMILY,
        PropertySpec(
            name="textAlign",
            kind=PropertyKind.ENUM,
            default="left",
            description="Text alignment",
            choices=("left", "center", "right"),
        ),
        _COLOR,
    ),
    default_styles={"padding": "8px"},
    default_frame=Frame(width=300, height=60),
)


class TextRenderer(Renderer):
    component_type = "text"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        return self.output(
            "div",
            text=props["content"],
            style={
                "fontSize": px(props["fontSize"]),
                "fontWeight": props["fontWeight"],
                "fontFamily": props["fontFamily"],
                "textAlign": props["textAlign"],
                "color": props["color"],
                **FILL_BOX,
                "overflow": "hidden",
            },
        )


class HeadingRenderer(Renderer):
    """Maps the discrete level 1-6 onto a fixed font-size scale."""

    component_type = "heading"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        level = props["level"]
        return self.output(
            f"h{level}",
            text=props["content"],
            attributes={"level": level},
            style={
                "fontSize": HEADING_FONT_SIZES[level],
                "fontFamily": props["fontFamily"],
                "textAlign": props["textAlign"],
                "color": props["color"],
                "margin": 0,
                **FILL_BOX,
                "overflow": "hidden",
            },
        )


__all__ = ["HEADING_FONT_SIZES", "TEXT_SCHEMA", "HEADING_SCHEMA", "TextRenderer", "HeadingRenderer"]
