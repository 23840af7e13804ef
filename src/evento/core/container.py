"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from evento.components.registry import ComponentRegistry, get_registry
from evento.monitoring.metrics import MetricsCollector, metrics_collector
from evento.services.rendering import RenderService
from evento.services.templates import TemplateService
from evento.storage.memory import InMemoryInstanceRepository, InMemoryTemplateRepository
from evento.storage.protocol import InstanceRepository, TemplateRepository

from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(
        self,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.metrics = metrics or metrics_collector

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        return self.metrics

    @singleton
    @provider
    def provide_registry(self) -> ComponentRegistry:
        """Provide the process-wide component registry."""
        return get_registry()

    @singleton
    @provider
    def provide_template_repository(self) -> TemplateRepository:
        return InMemoryTemplateRepository()

    @singleton
    @provider
    def provide_instance_repository(self) -> InstanceRepository:
        return InMemoryInstanceRepository()

    @singleton
    @provider
    def provide_template_service(
        self,
        templates: TemplateRepository,
        instances: InstanceRepository,
        registry: ComponentRegistry,
        settings: Settings,
        metrics: MetricsCollector,
    ) -> TemplateService:
        return TemplateService(templates, instances, registry, settings, metrics)

    @singleton
    @provider
    def provide_render_service(
        self,
        templates: TemplateRepository,
        instances: InstanceRepository,
        registry: ComponentRegistry,
        settings: Settings,
        metrics: MetricsCollector,
    ) -> RenderService:
        """Provide render service sharing the repositories above."""
        return RenderService(templates, instances, registry, settings, metrics)


def create_container(
    settings: Settings | None = None,
    metrics: MetricsCollector | None = None,
) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings, metrics)])
