"""
Built-in Component Renderers
One pure renderer per component type, grouped by category.
"""

from ..schema import ComponentSchema
from .base import FILL_BOX, Renderer, StyleValue, VisualOutput, px
from .content import HEADING_SCHEMA, TEXT_SCHEMA, HeadingRenderer, TextRenderer
from .custom import DATETIME_SCHEMA, QRCODE_SCHEMA, DateTimeRenderer, QRCodeRenderer
from .decorative import DIVIDER_SCHEMA, SHAPE_SCHEMA, DividerRenderer, ShapeRenderer
from .layout import CONTAINER_SCHEMA, ContainerRenderer
from .media import IMAGE_SCHEMA, ImageRenderer


def builtin_components() -> list[tuple[ComponentSchema, Renderer]]:
    """All built-in (schema, renderer) pairs in declaration order."""
    return [
        (TEXT_SCHEMA, TextRenderer()),
        (HEADING_SCHEMA, HeadingRenderer()),
        (IMAGE_SCHEMA, ImageRenderer()),
        (CONTAINER_SCHEMA, ContainerRenderer()),
        (DIVIDER_SCHEMA, DividerRenderer()),
        (SHAPE_SCHEMA, ShapeRenderer()),
        (QRCODE_SCHEMA, QRCodeRenderer()),
        (DATETIME_SCHEMA, DateTimeRenderer()),
    ]


__all__ = [
    "FILL_BOX",
    "Renderer",
    "StyleValue",
    "VisualOutput",
    "px",
    "builtin_components",
]
