"""Render Service - payload checks, caching, lifecycle, and persistence around the resolver."""

import time
from typing import Any

from returns.result import Success

from evento.binding.resolver import resolve
from evento.binding.visual import VisualTree
from evento.components.registry import ComponentRegistry, get_registry
from evento.core.cache import RenderCache
from evento.core.config import Settings, get_settings
from evento.core.errors import IllegalTransition, NotFound
from evento.core.hash import checksum
from evento.core.json import loads
from evento.core.logging_config import LogContext, get_logger
from evento.core.tracing import trace_operation
from evento.core.validate import check_payload
from evento.document.models import Template, utc_now
from evento.document.validation import raise_for_violations
from evento.instances.lifecycle import InstanceLifecycle
from evento.instances.models import InstanceStatus, TemplateInstance
from evento.monitoring.metrics import MetricsCollector, metrics_collector
from evento.storage.protocol import InstanceRepository, TemplateRepository

from .templates import check_template

logger = get_logger(__name__)


class RenderService:
    """Creates instances and drives each through its single resolution."""

    def __init__(
        self,
        templates: TemplateRepository,
        instances: InstanceRepository,
        registry: ComponentRegistry | None = None,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.templates = templates
        self.instances = instances
        self.registry = get_registry() if registry is None else registry
        self.settings = settings or get_settings()
        self.metrics = metrics or metrics_collector
        self.lifecycle = InstanceLifecycle(self.registry)

        self.cache: RenderCache | None = None
        if self.settings.enable_cache:
            self.cache = RenderCache(self.settings.cache_size, self.settings.cache_ttl)

    def _check_payload(self, data: Any) -> None:
        check_payload(data, self.settings.max_payload_size, self.settings.max_data_depth)

    def _ensure_valid(self, template: Template) -> None:
        result = check_template(template, self.registry, self.settings, self.metrics)
        raise_for_violations(result.violations)

    def render(self, template_id: str, data: dict[str, Any]) -> TemplateInstance:
        """
        Render a stored template against data as a new instance.

        Args:
            template_id: Template to render
            data: Instance data payload

        Returns:
            Persisted instance in ``rendered`` or ``error`` state

        Raises:
            RequestValidationError: If the payload is too large, too deep, or not an object
            NotFound: If the template does not exist
            InvalidTemplate / UnknownComponentType: Before any instance is created

        Only terminal instances are persisted; an unexpected renderer error
        propagates and leaves nothing stored.
        """
        self._check_payload(data)
        template = self.templates.get(template_id)
        self._ensure_valid(template)

        instance = self.lifecycle.create(template, data)

        start = time.perf_counter()
        with LogContext(template_id=template.id, instance_id=instance.id):
            try:
                with trace_operation("render_instance", nodes=template.node_count):
                    instance = self._resolve(instance, template)
            except Exception:
                self.metrics.record_render("exception", time.perf_counter() - start)
                raise

            self.metrics.record_render(instance.status.value, time.perf_counter() - start)
            self.instances.add(instance)
            self.metrics.record_instance(instance.status.value)

        return instance

    def _resolve(self, instance: TemplateInstance, template: Template) -> TemplateInstance:
        if self.cache is not None:
            cached = self.cache.lookup(template.id, template.version, instance.data)
            if cached is not None:
                self.metrics.record_cache_hit()
                logger.debug("render_cache_hit")
                return instance.mark_rendered(cached)
            self.metrics.record_cache_miss()

        instance = self.lifecycle.run(instance, template)
        if self.cache is not None and instance.status is InstanceStatus.RENDERED:
            self.cache.put(template.id, template.version, instance.data, instance.rendered_output)
        return instance

    def preview(
        self,
        template_id: str,
        preview_name: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> VisualTree:
        """
        Resolve a template without persisting anything.

        Uses explicit ``data`` when given, otherwise the named preview set
        (the first one when no name is given, empty data when there is none).

        Raises:
            NotFound: Unknown template or preview set
            UnboundReference / PropertyConstraintViolation: If resolution fails
        """
        template = self.templates.get(template_id)

        if data is None:
            if preview_name is not None:
                if preview_name not in template.preview_data:
                    raise NotFound("preview data", preview_name)
                data = template.preview_data[preview_name]
            else:
                data = next(iter(template.preview_data.values()), {})
        self._check_payload(data)
        self._ensure_valid(template)

        with trace_operation("preview_template", template_id=template.id):
            result = resolve(template, data, self.registry)
        if isinstance(result, Success):
            return result.unwrap()
        raise result.failure().to_exception()

    def get_instance(self, instance_id: str) -> TemplateInstance:
        return self.instances.get(instance_id)

    def export(self, instance_id: str) -> tuple[str, dict[str, Any]]:
        """
        Rendered output of an instance as a downloadable document.

        Returns:
            (filename, document)

        Raises:
            IllegalTransition: If the instance is not rendered
        """
        instance = self.instances.get(instance_id)
        if instance.status is not InstanceStatus.RENDERED:
            raise IllegalTransition(instance.id, instance.status.value, "exported")

        document = {
            "instanceId": instance.id,
            "templateId": instance.template_id,
            "templateVersion": instance.template_version,
            "renderedAt": instance.updated_at.isoformat(),
            "exportedAt": utc_now().isoformat(),
            "output": loads(instance.rendered_output),
            "checksum": checksum(instance.rendered_output),
        }
        logger.info("instance_exported", instance_id=instance.id)
        return f"{instance.id}.json", document

    def invalidate(self, template_id: str) -> int:
        """Forget cached renders of a template that changed or went away."""
        if self.cache is None:
            return 0
        dropped = self.cache.invalidate(template_id)
        if dropped:
            logger.debug("render_cache_invalidated", template_id=template_id, entries=dropped)
        return dropped


__all__ = ["RenderService"]
