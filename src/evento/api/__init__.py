"""HTTP surface."""

from .app import create_app
from .errors import error_body, register_error_handlers, status_for

__all__ = ["create_app", "error_body", "register_error_handlers", "status_for"]
