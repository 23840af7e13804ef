"""
Media Components
Images, with a fixed placeholder when no source is set.
"""

from ..properties import ConstraintPolicy, PropertyKind, PropertySpec, ValidatedProperties
from ..schema import ComponentCategory, ComponentSchema, Frame
from .base import FILL_BOX, Renderer, VisualOutput, px

PLACEHOLDER_BACKGROUND = "#f0f0f0"
PLACEHOLDER_COLOR = "#999"
PLACEHOLDER_LABEL = "No image"


IMAGE_SCHEMA = ComponentSchema(
    type="image",
    name="Image",
    description="An image element with aspect ratio controls",
    category=ComponentCategory.MEDIA.value,
    properties=(
        PropertySpec(
            name="src",
            kind=PropertyKind.URL,
            default="",
            description="Image URL or {{variable}}",
            policy=ConstraintPolicy.REJECT,
            required=True,
        ),
        PropertySpec(name="alt", kind=PropertyKind.TEXT, default="Image", description="Alt text"),
        PropertySpec(
            name="objectFit",
            kind=PropertyKind.ENUM,
            default="cover",
            description="Object fit",
            choices=("cover", "contain", "fill", "none"),
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
    default_styles={"overflow": "hidden"},
    default_frame=Frame(width=200, height=200),
)


class ImageRenderer(Renderer):
    component_type = "image"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        radius = px(props["borderRadius"])

        if not props["src"]:
            return self.output(
                "div",
                text=PLACEHOLDER_LABEL,
                attributes={"placeholder": True},
                style={
                    **FILL_BOX,
                    "backgroundColor": PLACEHOLDER_BACKGROUND,
                    "display": "flex",
                    "alignItems": "center",
                    "justifyContent": "center",
                    "borderRadius": radius,
                    "color": PLACEHOLDER_COLOR,
                    "fontSize": "14px",
                },
            )

        return self.output(
            "img",
            attributes={"src": props["src"], "alt": props["alt"]},
            style={**FILL_BOX, "objectFit": props["objectFit"], "borderRadius": radius},
        )


__all__ = [
    "PLACEHOLDER_BACKGROUND",
    "PLACEHOLDER_COLOR",
    "PLACEHOLDER_LABEL",
    "IMAGE_SCHEMA",
    "ImageRenderer",
]
