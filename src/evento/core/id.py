"""ID Generation System.

Centralized ULID-based ID management for templates and instances.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: Type-specific prefixes for debugging (tpl_*, inst_*, req_*)
"""

from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

TemplateID = NewType("TemplateID", str)
"""Saved template identifier"""

InstanceID = NewType("InstanceID", str)
"""Rendered template instance identifier"""

RequestID = NewType("RequestID", str)
"""HTTP request identifier"""

# ============================================================================
# ID Prefixes
# ============================================================================


class Prefix:
    """ID prefix constants."""

    TEMPLATE = "tpl"
    INSTANCE = "inst"
    REQUEST = "req"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator with prefix support."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


_generator = Generator()

# ============================================================================
# Typed ID Generators
# ============================================================================


def new_template_id() -> TemplateID:
    """Generate new template ID."""
    return TemplateID(_generator.generate_with_prefix(Prefix.TEMPLATE))


def new_instance_id() -> InstanceID:
    """Generate new instance ID."""
    return InstanceID(_generator.generate_with_prefix(Prefix.INSTANCE))


def new_request_id() -> RequestID:
    """Generate new request ID."""
    return RequestID(_generator.generate_with_prefix(Prefix.REQUEST))


# ============================================================================
# Validation and Parsing
# ============================================================================


def is_valid(id_str: str) -> bool:
    """Check if string is a valid (optionally prefixed) ULID.

    Args:
        id_str: ID string to validate

    Returns:
        True if valid ULID format
    """
    try:
        ulid_part = id_str.split("_")[1] if "_" in id_str else id_str
        if len(ulid_part) != 26:
            return False
        ULID.from_str(ulid_part)
        return True
    except (ValueError, IndexError):
        return False


def is_template_id(id_str: str) -> bool:
    """Check if ID is a template ID."""
    return id_str.startswith(f"{Prefix.TEMPLATE}_") and is_valid(id_str)


def is_instance_id(id_str: str) -> bool:
    """Check if ID is an instance ID."""
    return id_str.startswith(f"{Prefix.INSTANCE}_") and is_valid(id_str)


__all__ = [
    "TemplateID",
    "InstanceID",
    "RequestID",
    "Prefix",
    "new_template_id",
    "new_instance_id",
    "new_request_id",
    "is_valid",
    "is_template_id",
    "is_instance_id",
]
