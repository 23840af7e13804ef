"""
Data Binding
Binding paths, payload lookup, and the resolved visual tree.

The resolver itself lives in ``evento.binding.resolver``.
"""

from .paths import (
    INTERPOLATION_PATTERN,
    BindingPath,
    BindingPathError,
    full_reference,
    interpolate,
    interpolation_paths,
    is_valid_path,
    stringify,
)
from .visual import VisualNode, VisualTree

__all__ = [
    "INTERPOLATION_PATTERN",
    "BindingPath",
    "BindingPathError",
    "full_reference",
    "interpolate",
    "interpolation_paths",
    "is_valid_path",
    "stringify",
    "VisualNode",
    "VisualTree",
]
