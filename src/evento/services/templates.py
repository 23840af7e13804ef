"""Template Service - parse, validate, and persist template documents."""

from typing import Any

from evento.components.registry import ComponentRegistry, get_registry
from evento.core.config import Settings, get_settings
from evento.core.errors import InvalidTemplate, UnknownComponentType
from evento.core.logging_config import get_logger
from evento.document.bindings import bindings_by_node, collect_bindings
from evento.document.models import Template
from evento.document.parser import parse_template
from evento.document.revision import archive, duplicate, publish, revise, unpublish
from evento.document.validation import ValidationResult, raise_for_violations, validate
from evento.monitoring.metrics import MetricsCollector, metrics_collector
from evento.storage.protocol import InstanceRepository, Page, TemplateQuery, TemplateRepository

logger = get_logger(__name__)

# Fields a revision may replace
_REVISABLE = ("name", "description", "category", "status", "thumbnail", "nodes", "root_ids", "preview_data")


def check_template(
    template: Template,
    registry: ComponentRegistry,
    settings: Settings,
    metrics: MetricsCollector,
) -> ValidationResult:
    """Validate against the registry and the configured node limit, counting failures."""
    result = validate(template, registry, settings.max_template_nodes)
    for violation in result.violations:
        metrics.record_validation_failure(violation.kind.value)
    return result


class TemplateService:
    """Template CRUD with structural validation on every write."""

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

    def check(self, template: Template) -> ValidationResult:
        return check_template(template, self.registry, self.settings, self.metrics)

    def ensure_valid(self, template: Template) -> None:
        raise_for_violations(self.check(template).violations)

    def validate_document(self, document: Any) -> ValidationResult:
        """Validate an unsaved document; parse-time violations are reported too."""
        try:
            template = parse_template(document)
        except (InvalidTemplate, UnknownComponentType) as e:
            return ValidationResult(violations=tuple(e.violations))
        return self.check(template)

    def create(self, document: Any) -> Template:
        template = parse_template(document)
        self.ensure_valid(template)
        self.templates.add(template)
        logger.info("template_created", template_id=template.id, nodes=template.node_count)
        return template

    def get(self, template_id: str) -> Template:
        return self.templates.get(template_id)

    def list_templates(self, query: TemplateQuery | None = None) -> Page:
        return self.templates.list(query)

    def update(self, template_id: str, document: Any) -> Template:
        """Replace content as a new revision (version + 1)."""
        current = self.templates.get(template_id)
        parsed = parse_template(_merge_document(current, document), template_id=template_id)
        self.ensure_valid(parsed)

        changes = {field: getattr(parsed, field) for field in _REVISABLE}
        updated = self.templates.update(revise(current, **changes))
        logger.info("template_updated", template_id=template_id, version=updated.version)
        return updated

    def delete(self, template_id: str) -> int:
        """Delete a template and its instances; returns the number of instances removed."""
        self.templates.delete(template_id)
        removed = self.instances.delete_for_template(template_id)
        logger.info("template_deleted", template_id=template_id, instances=removed)
        return removed

    def duplicate(self, template_id: str) -> Template:
        copy = self.templates.add(duplicate(self.templates.get(template_id)))
        logger.info("template_duplicated", source_id=template_id, template_id=copy.id)
        return copy

    def publish(self, template_id: str) -> Template:
        return self.templates.update(publish(self.templates.get(template_id)))

    def unpublish(self, template_id: str) -> Template:
        return self.templates.update(unpublish(self.templates.get(template_id)))

    def archive(self, template_id: str) -> Template:
        return self.templates.update(archive(self.templates.get(template_id)))

    def bindings(self, template_id: str) -> list[str]:
        """Binding paths the template needs from instance data."""
        return collect_bindings(self.templates.get(template_id))

    def node_bindings(self, template_id: str) -> dict[str, dict[str, list[str]]]:
        return bindings_by_node(self.templates.get(template_id))


def _merge_document(current: Template, document: Any) -> Any:
    """Overlay a partial update on the stored template; omitted fields are kept."""
    if not isinstance(document, dict):
        return document
    merged = current.to_wire()
    if "components" in document:
        merged.pop("nodes")
        merged.pop("rootIds")
    elif "nodes" in document and "rootIds" not in document and "root_ids" not in document:
        merged.pop("rootIds")
    merged.update(document)
    return merged


__all__ = ["check_template", "TemplateService"]
