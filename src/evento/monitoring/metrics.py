"""
Metrics Collection
Prometheus metrics for rendering, validation, and caching
"""

import time
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the rendering engine.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or REGISTRY

        # Render metrics
        self.render_requests_total = Counter(
            "evento_render_requests_total",
            "Total number of instance render requests",
            ["status"],
            registry=self.registry,
        )
        self.render_duration = Histogram(
            "evento_render_duration_seconds",
            "Template resolution duration in seconds",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5],
            registry=self.registry,
        )

        # Validation metrics
        self.validation_failures_total = Counter(
            "evento_validation_failures_total",
            "Total number of template validation failures",
            ["kind"],
            registry=self.registry,
        )

        # Cache metrics
        self.cache_hits = Counter(
            "evento_cache_hits_total",
            "Total number of render cache hits",
            registry=self.registry,
        )
        self.cache_misses = Counter(
            "evento_cache_misses_total",
            "Total number of render cache misses",
            registry=self.registry,
        )

        # Instance metrics
        self.instances_total = Counter(
            "evento_instances_total",
            "Total number of instances reaching a terminal state",
            ["status"],
            registry=self.registry,
        )

        # System metrics
        self.uptime = Gauge(
            "evento_uptime_seconds",
            "Service uptime in seconds",
            registry=self.registry,
        )
        self.start_time = time.time()

    def record_render(self, status: str, duration: float) -> None:
        """Record a render request."""
        self.render_requests_total.labels(status=status).inc()
        self.render_duration.observe(duration)

    def record_validation_failure(self, kind: str) -> None:
        self.validation_failures_total.labels(kind=kind).inc()

    def record_cache_hit(self) -> None:
        self.cache_hits.inc()

    def record_cache_miss(self) -> None:
        self.cache_misses.inc()

    def record_instance(self, status: str) -> None:
        """Record an instance reaching a terminal status."""
        self.instances_total.labels(status=status).inc()

    def update_uptime(self) -> None:
        """Update the uptime metric."""
        self.uptime.set(time.time() - self.start_time)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        self.update_uptime()
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
