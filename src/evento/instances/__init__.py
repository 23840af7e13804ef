"""
Template Instances
Instance model and the pending -> rendered | error lifecycle.
"""

from .lifecycle import InstanceLifecycle
from .models import InstanceError, InstanceStatus, TemplateInstance

__all__ = ["InstanceLifecycle", "InstanceError", "InstanceStatus", "TemplateInstance"]
