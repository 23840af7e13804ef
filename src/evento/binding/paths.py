"""
Binding Paths
Parsing of dotted/indexed data paths and lookup into instance payloads.

Syntax:
    user.email          nested keys
    guests[0].name      list index
    matrix[1][2]        chained indices
    guests.0.name       bare numeric segment also indexes lists
"""

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from returns.result import Failure, Result, Success

from evento.core.json import canonical_dumps

# {{ path }} inside a text value
INTERPOLATION_PATTERN = re.compile(r"\{\{\s*([^{}]*?)\s*\}\}")

_KEY = r"[A-Za-z_$][\w$\-]*|\d+"
_SEGMENT_PATTERN = re.compile(rf"^({_KEY})((?:\[\d+\])*)$")
_INDEX_PATTERN = re.compile(r"\[(\d+)\]")

PathSegment = str | int


class BindingPathError(ValueError):
    """Malformed binding path."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid binding path '{path}': {reason}")
        self.path = path
        self.reason = reason


class BindingPath:
    """Parsed, immutable binding path."""

    __slots__ = ("raw", "segments")

    def __init__(self, raw: str, segments: tuple[PathSegment, ...]):
        self.raw = raw
        self.segments = segments

    @classmethod
    def parse(cls, path: str) -> "BindingPath":
        """
        Parse a path string.

        Args:
            path: Path such as "guests[0].name"

        Returns:
            Parsed path

        Raises:
            BindingPathError: If the path is empty or malformed
        """
        if not isinstance(path, str):
            raise BindingPathError(str(path), "path must be a string")

        text = path.strip()
        if not text:
            raise BindingPathError(path, "path is empty")

        segments: list[PathSegment] = []
        for part in text.split("."):
            match = _SEGMENT_PATTERN.match(part)
            if match is None:
                raise BindingPathError(path, f"bad segment '{part}'")
            key, indices = match.groups()
            segments.append(int(key) if key.isdigit() else key)
            segments.extend(int(i) for i in _INDEX_PATTERN.findall(indices))

        return cls(text, tuple(segments))

    def lookup(self, data: Any) -> Result[Any, int]:
        """
        Walk the payload along this path.

        Returns:
            Success(value) or Failure(position of the first segment that missed)
        """
        current = data
        for position, segment in enumerate(self.segments):
            if isinstance(current, Mapping):
                key = str(segment)
                if key not in current:
                    return Failure(position)
                current = current[key]
            elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
                if not isinstance(segment, int) or segment >= len(current):
                    return Failure(position)
                current = current[segment]
            else:
                # Descending into a scalar (or None)
                return Failure(position)
        return Success(current)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BindingPath) and other.segments == self.segments

    def __hash__(self) -> int:
        return hash(self.segments)

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"BindingPath({self.raw!r})"


def is_valid_path(path: str) -> bool:
    try:
        BindingPath.parse(path)
    except BindingPathError:
        return False
    return True


def interpolation_paths(text: str) -> list[str]:
    """Distinct {{path}} expressions in a text value, first-seen order."""
    return list(dict.fromkeys(m.group(1) for m in INTERPOLATION_PATTERN.finditer(text)))


def full_reference(text: str) -> str | None:
    """Path of a value that is exactly one {{path}} expression, else None."""
    match = INTERPOLATION_PATTERN.fullmatch(text.strip())
    return match.group(1) if match else None


def stringify(value: Any) -> str:
    """Text form of a bound value inside an interpolated string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return canonical_dumps(value)
    return str(value)


def interpolate(text: str, lookup: Callable[[str], Any]) -> str:
    """Replace every {{path}} in text with lookup(path) rendered by ``stringify``."""
    return INTERPOLATION_PATTERN.sub(lambda m: stringify(lookup(m.group(1))), text)


__all__ = [
    "INTERPOLATION_PATTERN",
    "PathSegment",
    "BindingPathError",
    "BindingPath",
    "is_valid_path",
    "interpolation_paths",
    "full_reference",
    "stringify",
    "interpolate",
]
