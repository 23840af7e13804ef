"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    EventoError,
    UnknownComponentType,
    InvalidTemplate,
    UnboundReference,
    PropertyConstraintViolation,
    IllegalTransition,
    NotFound,
    RequestValidationError,
)
from .validate import MAX_PAYLOAD_SIZE, MAX_DATA_DEPTH, check_payload
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    loads,
    loads_object,
    canonical_dumps,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)
from .hash import Algorithm, checksum, hash_string, hash_fields
from .cache import RenderCache, Stats, render_key
from .tracing import trace_operation


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "EventoError",
    "UnknownComponentType",
    "InvalidTemplate",
    "UnboundReference",
    "PropertyConstraintViolation",
    "IllegalTransition",
    "NotFound",
    "RequestValidationError",
    # Validation
    "MAX_PAYLOAD_SIZE",
    "MAX_DATA_DEPTH",
    "check_payload",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "loads",
    "loads_object",
    "canonical_dumps",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_fields",
    "checksum",
    # Caching
    "RenderCache",
    "render_key",
    "Stats",
    # Tracing
    "trace_operation",
]
