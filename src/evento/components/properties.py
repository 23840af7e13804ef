"""
Property Contracts
Declared property domains and the clamp / substitute / reject policies
that bring any supplied value back inside them.
"""

import math
import re
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from evento.core.errors import PropertyConstraintViolation


class PropertyKind(str, Enum):
    """Semantic type of a component property."""

    TEXT = "text"
    NUMBER = "number"
    INTEGER = "integer"
    ENUM = "enum"
    COLOR = "color"
    URL = "url"


class ConstraintPolicy(str, Enum):
    """What happens to a value outside the declared domain."""

    CLAMP = "clamp"            # Pull numbers back into [minimum, maximum]
    SUBSTITUTE = "substitute"  # Replace with the declared default
    REJECT = "reject"          # Raise PropertyConstraintViolation


_COLOR_PATTERN = re.compile(
    r"^(#[0-9a-fA-F]{3,4}|#[0-9a-fA-F]{6}|#[0-9a-fA-F]{8}"
    r"|(rgb|rgba|hsl|hsla)\([0-9.,%\s/]+\)"
    r"|[a-zA-Z]{3,20})$"
)
_SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_SAFE_SCHEMES = frozenset({"http", "https"})
_INT_PATTERN = re.compile(r"^[+-]?\d+$")


class PropertySpec(BaseModel):
    """Declared contract for one configurable property."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: PropertyKind
    default: Any = None
    description: str = ""
    choices: tuple[str, ...] | None = None
    minimum: float | None = None
    maximum: float | None = None
    policy: ConstraintPolicy = ConstraintPolicy.SUBSTITUTE
    required: bool = False
    empty_as_missing: bool = Field(default=False, description="Treat '' like an omitted value")

    def to_dict(self) -> dict[str, Any]:
        """Export for API responses (omits unset constraints)."""
        data: dict[str, Any] = {
            "type": self.kind.value,
            "description": self.description,
            "default": self.default,
            "policy": self.policy.value,
            "required": self.required,
        }
        if self.choices is not None:
            data["enum"] = list(self.choices)
        if self.minimum is not None:
            data["minimum"] = self.minimum
        if self.maximum is not None:
            data["maximum"] = self.maximum
        return data


class ValidatedProperties(Mapping[str, Any]):
    """
    Complete, in-domain property set for one component type.

    Every declared property is present. Only produced by
    ``coerce_properties`` so renderers never see raw input.
    """

    __slots__ = ("component_type", "_values")

    def __init__(self, component_type: str, values: dict[str, Any]) -> None:
        self.component_type = component_type
        self._values = dict(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ValidatedProperties({self.component_type!r}, {self._values!r})"


def _out_of_domain(spec: PropertySpec, component_type: str, value: Any, reason: str) -> Any:
    if spec.policy == ConstraintPolicy.REJECT:
        raise PropertyConstraintViolation(component_type, spec.name, value, reason)
    return spec.default


def _to_number(value: Any) -> float | int | None:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if not isinstance(value, float) or math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_PATTERN.match(text):
            return int(text)
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _coerce_number(spec: PropertySpec, component_type: str, value: Any) -> Any:
    number = _to_number(value)
    if number is None:
        return _out_of_domain(spec, component_type, value, f"expected a number, got {value!r}")

    if spec.kind == PropertyKind.INTEGER and not isinstance(number, int):
        number = int(math.floor(number + 0.5))

    low, high = spec.minimum, spec.maximum
    below = low is not None and number < low
    above = high is not None and number > high
    if not (below or above):
        return number

    if spec.policy == ConstraintPolicy.CLAMP:
        bound = low if below else high
        return int(bound) if isinstance(number, int) and float(bound).is_integer() else bound
    return _out_of_domain(spec, component_type, value, f"{number} outside [{low}, {high}]")


def _coerce_text(spec: PropertySpec, component_type: str, value: Any) -> Any:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return _out_of_domain(spec, component_type, value, f"expected text, got {type(value).__name__}")


def _coerce_enum(spec: PropertySpec, component_type: str, value: Any) -> Any:
    if isinstance(value, str) and spec.choices and value in spec.choices:
        return value
    return _out_of_domain(spec, component_type, value, f"{value!r} not one of {list(spec.choices or ())}")


def _coerce_color(spec: PropertySpec, component_type: str, value: Any) -> Any:
    if isinstance(value, str) and _COLOR_PATTERN.match(value.strip()):
        return value.strip()
    return _out_of_domain(spec, component_type, value, f"{value!r} is not a color")


def _coerce_url(spec: PropertySpec, component_type: str, value: Any) -> Any:
    if not isinstance(value, str):
        return _out_of_domain(spec, component_type, value, f"expected a URL, got {type(value).__name__}")

    url = value.strip()
    match = _SCHEME_PATTERN.match(url)
    if match is None:
        return url  # relative path or empty
    scheme = match.group(1).lower()
    if scheme in _SAFE_SCHEMES or url.lower().startswith("data:image/"):
        return url
    return _out_of_domain(spec, component_type, value, f"scheme '{scheme}' is not allowed")


_COERCERS = {
    PropertyKind.TEXT: _coerce_text,
    PropertyKind.NUMBER: _coerce_number,
    PropertyKind.INTEGER: _coerce_number,
    PropertyKind.ENUM: _coerce_enum,
    PropertyKind.COLOR: _coerce_color,
    PropertyKind.URL: _coerce_url,
}


def coerce_value(spec: PropertySpec, component_type: str, value: Any) -> Any:
    """
    Bring one value inside its declared domain.

    Args:
        spec: Property contract
        component_type: Owning component type (for error messages)
        value: Supplied value; None means omitted

    Returns:
        The value, the clamped value, or the declared default

    Raises:
        PropertyConstraintViolation: If the value is out of domain and the policy is reject
    """
    if value is None or (spec.empty_as_missing and value == ""):
        return spec.default
    return _COERCERS[spec.kind](spec, component_type, value)


def coerce_properties(
    component_type: str,
    specs: tuple[PropertySpec, ...],
    values: Mapping[str, Any],
) -> ValidatedProperties:
    """
    Produce a complete property set for a component.

    Declared defaults fill omitted properties; undeclared keys are refused.

    Raises:
        PropertyConstraintViolation: For undeclared keys or rejected values
    """
    declared = {spec.name for spec in specs}
    for key in values:
        if key not in declared:
            raise PropertyConstraintViolation(component_type, key, values[key], "undeclared property")

    return ValidatedProperties(
        component_type,
        {spec.name: coerce_value(spec, component_type, values.get(spec.name)) for spec in specs},
    )


__all__ = [
    "PropertyKind",
    "ConstraintPolicy",
    "PropertySpec",
    "ValidatedProperties",
    "coerce_value",
    "coerce_properties",
]
