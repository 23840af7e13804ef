"""
Storage
Repository interfaces and in-memory implementations.
"""

from .memory import InMemoryInstanceRepository, InMemoryTemplateRepository
from .protocol import InstanceRepository, Page, TemplateQuery, TemplateRepository

__all__ = [
    "InMemoryInstanceRepository",
    "InMemoryTemplateRepository",
    "InstanceRepository",
    "Page",
    "TemplateQuery",
    "TemplateRepository",
]
