"""
Template Document Model
Arena-based template trees, parsing, validation, and binding extraction.
"""

from .bindings import bindings_by_node, collect_bindings
from .models import (
    Interpolation,
    LiteralValue,
    PropertyValue,
    Reference,
    Template,
    TemplateCategory,
    TemplateNode,
    TemplateStatus,
    is_binding,
)
from .parser import TemplateParser, parse_property_value, parse_template, parse_template_json
from .revision import archive, duplicate, publish, revise, unpublish
from .traversal import Visit, preorder, walk
from .validation import (
    ValidationResult,
    Violation,
    ViolationKind,
    ensure_valid,
    raise_for_violations,
    validate,
)

__all__ = [
    "bindings_by_node",
    "collect_bindings",
    "Interpolation",
    "LiteralValue",
    "PropertyValue",
    "Reference",
    "Template",
    "TemplateCategory",
    "TemplateNode",
    "TemplateStatus",
    "is_binding",
    "TemplateParser",
    "parse_property_value",
    "parse_template",
    "parse_template_json",
    "archive",
    "duplicate",
    "publish",
    "revise",
    "unpublish",
    "Visit",
    "preorder",
    "walk",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "ensure_valid",
    "raise_for_violations",
    "validate",
]
