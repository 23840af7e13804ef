"""
Custom Components
QR codes and formatted date/time labels.
"""

import re
from datetime import datetime

from ..properties import ConstraintPolicy, PropertyKind, PropertySpec, ValidatedProperties
from ..schema import ComponentCategory, ComponentSchema, Frame
from .base import Renderer, VisualOutput, px

QR_DEFAULT_VALUE = "https://example.com"
QR_MAX_SIZE = 200
QR_MIN_SIZE = 32

NO_DATE_LABEL = "No date"
DEFAULT_DATE_FORMAT = "MMMM DD, YYYY"


QRCODE_SCHEMA = ComponentSchema(
    type="qrcode",
    name="QR Code",
    description="A QR code that encodes a URL or text",
    category=ComponentCategory.CUSTOM.value,
    properties=(
        PropertySpec(
            name="value",
            kind=PropertyKind.TEXT,
            default=QR_DEFAULT_VALUE,
            description="Value to encode (URL or {{variable}})",
            required=True,
            empty_as_missing=True,
        ),
        PropertySpec(
            name="size",
            kind=PropertyKind.INTEGER,
            default=128,
            description="QR code size in pixels",
            minimum=QR_MIN_SIZE,
            maximum=QR_MAX_SIZE,
            policy=ConstraintPolicy.CLAMP,
        ),
        PropertySpec(name="fgColor", kind=PropertyKind.COLOR, default="#000000", description="Foreground color"),
        PropertySpec(name="bgColor", kind=PropertyKind.COLOR, default="#ffffff", description="Background color"),
    ),
    default_frame=Frame(width=150, height=150),
)


DATETIME_SCHEMA = ComponentSchema(
    type="datetime",
    name="Date & Time",
    description="A formatted date and/or time display",
    category=ComponentCategory.CUSTOM.value,
    properties=(
        PropertySpec(
            name="value",
            kind=PropertyKind.TEXT,
            default="",
            description="ISO date string or {{variable}}",
            required=True,
        ),
        PropertySpec(
            name="format",
            kind=PropertyKind.TEXT,
            default=DEFAULT_DATE_FORMAT,
            description="Date format pattern",
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
        PropertySpec(name="fontFamily", kind=PropertyKind.TEXT, default="Arial", description="Font family"),
        PropertySpec(name="color", kind=PropertyKind.COLOR, default="#000000", description="Text color (hex)"),
    ),
    default_styles={"padding": "8px"},
    default_frame=Frame(width=200, height=40),
)


class QRCodeRenderer(Renderer):
    component_type = "qrcode"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        # Re-clamp so a bound value can never exceed the drawable size
        size = min(props["size"], QR_MAX_SIZE)
        return self.output(
            "svg",
            attributes={
                "value": props["value"] or QR_DEFAULT_VALUE,
                "size": size,
                "fgColor": props["fgColor"],
                "bgColor": props["bgColor"],
            },
            style={
                "width": "100%",
                "height": "100%",
                "display": "flex",
                "alignItems": "center",
                "justifyContent": "center",
                "backgroundColor": props["bgColor"],
            },
        )


# ============================================================================
# Date formatting
# ============================================================================

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Longest tokens first so MMMM wins over MM; [text] is an escaped literal
_TOKEN_PATTERN = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|ss|A|a")


def _twelve_hour(dt: datetime) -> int:
    return dt.hour % 12 or 12


_TOKENS = {
    "YYYY": lambda dt: f"{dt.year:04d}",
    "YY": lambda dt: f"{dt.year % 100:02d}",
    "MMMM": lambda dt: MONTH_NAMES[dt.month - 1],
    "MMM": lambda dt: MONTH_NAMES[dt.month - 1][:3],
    "MM": lambda dt: f"{dt.month:02d}",
    "M": lambda dt: str(dt.month),
    "DD": lambda dt: f"{dt.day:02d}",
    "D": lambda dt: str(dt.day),
    "dddd": lambda dt: DAY_NAMES[dt.weekday()],
    "ddd": lambda dt: DAY_NAMES[dt.weekday()][:3],
    "HH": lambda dt: f"{dt.hour:02d}",
    "H": lambda dt: str(dt.hour),
    "hh": lambda dt: f"{_twelve_hour(dt):02d}",
    "h": lambda dt: str(_twelve_hour(dt)),
    "mm": lambda dt: f"{dt.minute:02d}",
    "ss": lambda dt: f"{dt.second:02d}",
    "A": lambda dt: "AM" if dt.hour < 12 else "PM",
    "a": lambda dt: "am" if dt.hour < 12 else "pm",
}


def parse_date(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime; None when unparseable."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(dt: datetime, pattern: str) -> str:
    """
    Format a datetime with moment-style tokens.

    Example:
        format_date(datetime(2026, 6, 1), "MMMM DD, YYYY") -> "June 01, 2026"
    """
    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        return _TOKENS[token](dt)

    return _TOKEN_PATTERN.sub(replace, pattern)


class DateTimeRenderer(Renderer):
    """Formats the bound value only; never reads the clock."""

    component_type = "datetime"

    def render(self, props: ValidatedProperties) -> VisualOutput:
        value = props["value"]
        if not value:
            label = NO_DATE_LABEL
        else:
            parsed = parse_date(value)
            label = format_date(parsed, props["format"]) if parsed else value

        return self.output(
            "div",
            text=label,
            style={
                "fontSize": px(props["fontSize"]),
                "fontFamily": props["fontFamily"],
                "color": props["color"],
                "width": "100%",
                "height": "100%",
                "display": "flex",
                "alignItems": "center",
            },
        )


__all__ = [
    "QR_DEFAULT_VALUE",
    "QR_MAX_SIZE",
    "QR_MIN_SIZE",
    "NO_DATE_LABEL",
    "QRCODE_SCHEMA",
    "DATETIME_SCHEMA",
    "QRCodeRenderer",
    "DateTimeRenderer",
    "parse_date",
    "format_date",
]
