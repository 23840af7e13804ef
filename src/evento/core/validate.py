"""Data payload validation."""

from typing import Any

from .errors import RequestValidationError
from .json import JSONParseError, canonical_dumps, validate_json_depth, validate_json_size


# Validation limits
MAX_PAYLOAD_SIZE = 256 * 1024  # 256KB
MAX_DATA_DEPTH = 20


def check_payload(
    data: Any,
    max_size: int = MAX_PAYLOAD_SIZE,
    max_depth: int = MAX_DATA_DEPTH,
) -> None:
    """
    Validate a caller-supplied data payload before resolution.

    Args:
        data: Decoded payload
        max_size: Maximum encoded size in bytes
        max_depth: Maximum nesting depth

    Raises:
        RequestValidationError: If the payload is not an object, too large or too deep
    """
    if not isinstance(data, dict):
        raise RequestValidationError(f"Data payload must be an object, got {type(data).__name__}")

    try:
        validate_json_depth(data, max_depth)
        validate_json_size(canonical_dumps(data), max_size, "Data payload")
    except JSONParseError as e:
        raise RequestValidationError(str(e)) from e


__all__ = [
    "MAX_PAYLOAD_SIZE",
    "MAX_DATA_DEPTH",
    "check_payload",
]
