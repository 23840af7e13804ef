"""
Services
Template management and instance rendering on top of the engine.
"""

from .rendering import RenderService
from .templates import TemplateService, check_template

__all__ = ["RenderService", "TemplateService", "check_template"]
