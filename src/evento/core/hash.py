"""Hashing helpers.

xxhash64 for render cache keys, SHA256 for the checksum attached to
exported instance documents.
"""

import hashlib
from collections.abc import Callable
from enum import Enum

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"
    SHA256 = "sha256"


_DIGESTS: dict[Algorithm, Callable[[bytes], str]] = {
    Algorithm.XXHASH64: lambda data: xxhash.xxh64(data).hexdigest(),
    Algorithm.SHA256: lambda data: hashlib.sha256(data).hexdigest(),
}

# Separates fields so ("ab", "c") and ("a", "bc") hash differently
FIELD_SEPARATOR = "\x00"


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        algorithm: Hash algorithm (default: xxhash64)
        truncate: Optional length to truncate digest

    Returns:
        Hex digest string
    """
    digest = _DIGESTS[Algorithm(algorithm)](text.encode("utf-8"))
    return digest[:truncate] if truncate else digest


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash multiple fields together (deterministic).

    Examples:
        >>> hash_fields("tpl_01H...", "3", '{"title":"Welcome"}')
        'b4f3c2...'
    """
    return hash_string(FIELD_SEPARATOR.join(fields), algorithm)


def checksum(text: str) -> str:
    """SHA256 checksum, prefixed with the algorithm name."""
    return f"{Algorithm.SHA256.value}:{hash_string(text, Algorithm.SHA256)}"


__all__ = [
    "Algorithm",
    "FIELD_SEPARATOR",
    "hash_string",
    "hash_fields",
    "checksum",
]
