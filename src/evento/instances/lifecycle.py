"""Instance lifecycle: the single permitted resolution of a pending instance."""

from typing import Any

from returns.result import Success

from evento.binding.resolver import resolve
from evento.components.registry import ComponentRegistry, get_registry
from evento.core.errors import IllegalTransition
from evento.core.logging_config import get_logger
from evento.document.models import Template

from .models import InstanceError, InstanceStatus, TemplateInstance

logger = get_logger(__name__)


class InstanceLifecycle:
    """Drives an instance from pending to exactly one terminal state."""

    def __init__(self, registry: ComponentRegistry | None = None):
        self.registry = get_registry() if registry is None else registry

    def create(self, template: Template, data: dict[str, Any]) -> TemplateInstance:
        return TemplateInstance(template_id=template.id, template_version=template.version, data=data)

    def run(self, instance: TemplateInstance, template: Template) -> TemplateInstance:
        """
        Resolve the instance's data against its template.

        Args:
            instance: Pending instance
            template: Template the instance refers to

        Returns:
            The instance in ``rendered`` or ``error`` state

        Raises:
            IllegalTransition: If the instance is not pending
            InvalidTemplate / UnknownComponentType: If the template is structurally invalid
        """
        if instance.status is not InstanceStatus.PENDING:
            raise IllegalTransition(instance.id, instance.status.value, "resolving")

        result = resolve(template, instance.data, self.registry)

        if isinstance(result, Success):
            tree = result.unwrap()
            logger.info("instance_rendered", instance_id=instance.id, nodes=tree.node_count)
            return instance.mark_rendered(tree.to_json())

        error = result.failure()
        logger.warning(
            "instance_failed",
            instance_id=instance.id,
            kind=error.kind.value,
            node_id=error.node_id,
            property=error.property,
            path=error.path,
        )
        return instance.mark_failed(InstanceError.from_resolution(error))


__all__ = ["InstanceLifecycle"]
