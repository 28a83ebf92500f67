"""Prometheus metrics for the record store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all record store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        self.operations_total = Counter(
            "record_store_operations_total",
            "Total number of store operations",
            ["operation", "status"],  # status: ok, not_found, failed
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "record_store_operation_latency_seconds",
            "Store operation latency in seconds",
            ["operation"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

        self.transactions_total = Counter(
            "record_store_transactions_total",
            "Total number of finished transactions",
            ["outcome"],  # commit, rollback, rollback_failed
            registry=self._registry,
        )

        self.connection_open = Gauge(
            "record_store_connection_open",
            "1 while the backend connection is open",
            registry=self._registry,
        )

        self.info = Info(
            "record_store",
            "Record store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry these metrics are registered in."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from record_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
