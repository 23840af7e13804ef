"""Fast, deterministic JSON encoding and decoding."""

from typing import Any

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def loads(data: str | bytes) -> Any:
    """
    Decode JSON text with msgspec.

    Args:
        data: JSON text or UTF-8 bytes

    Returns:
        Decoded Python value

    Raises:
        JSONParseError: If the text is not valid JSON
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def loads_object(data: str | bytes) -> dict[str, Any]:
    """Decode JSON text that must hold an object."""
    result = loads(data)
    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def canonical_dumps(obj: Any) -> str:
    """
    Encode object to canonical JSON (sorted keys, compact).

    Identical inputs always produce byte-identical output, which makes the
    result usable as a cache key and as a stored rendering.

    Args:
        obj: Object to encode

    Returns:
        JSON string
    """
    try:
        return orjson.dumps(obj, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    except TypeError:
        pass
    # Integers outside the 64-bit range
    try:
        return msgspec.json.encode(obj, order="sorted").decode("utf-8")
    except (TypeError, ValueError) as e:
        raise JSONParseError(f"Value is not JSON serializable: {e}", e) from e


def safe_json_dumps(obj: Any, indent: int = 0) -> str:
    """
    Encode object to JSON string using the fastest available encoder.

    Args:
        obj: Object to encode
        indent: 2 for pretty-printed output, 0 for compact

    Returns:
        JSON string
    """
    try:
        if indent:
            return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
        return orjson.dumps(obj).decode("utf-8")
    except TypeError:
        # Integers outside the 64-bit range
        encoded = msgspec.json.encode(obj)
        if indent:
            encoded = msgspec.json.format(encoded, indent=indent)
        return encoded.decode("utf-8")


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate encoded JSON size.

    Args:
        data: JSON text to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 20) -> None:
    """
    Validate JSON nesting depth without recursion.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth

    Raises:
        JSONParseError: If depth exceeds limit
    """
    stack: list[tuple[Any, int]] = [(obj, 0)]
    while stack:
        value, depth = stack.pop()
        if depth > max_depth:
            raise JSONParseError(f"JSON nesting depth {depth} exceeds maximum {max_depth}")
        if isinstance(value, dict):
            stack.extend((item, depth + 1) for item in value.values())
        elif isinstance(value, list):
            stack.extend((item, depth + 1) for item in value)


__all__ = [
    "JSONParseError",
    "loads",
    "loads_object",
    "canonical_dumps",
    "safe_json_dumps",
    "validate_json_size",
    "validate_json_depth",
]
