"""Dependency injection container for the record store."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from opentelemetry import trace

from record_store.adapters.outbound import SQLiteBackend
from record_store.application.record_store import TransactionalRecordStore
from record_store.infrastructure.config import Config, get_config
from record_store.infrastructure.logging import get_logger, setup_logging
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from record_store.infrastructure.tracing import get_tracer, setup_tracing
from record_store.ports.outbound import DatabaseBackend


@dataclass
class Container:
    """Wires configuration, observability and the store together."""

    config: Config
    logger: structlog.BoundLogger
    tracer: trace.Tracer
    metrics: MetricsRegistry
    store: TransactionalRecordStore

    @classmethod
    def create(
        cls,
        config: Config | None = None,
        backend: DatabaseBackend | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> Container:
        """Create the container; the store is built but not initialized.

        Args:
            config: Configuration (the cached global one by default).
            backend: Backend override, mainly for tests.
            metrics: Metrics registry override, mainly for tests.
        """
        config = config or get_config()
        observability = config.observability

        setup_logging(observability.log_level, observability.log_format)

        if observability.otel_endpoint:
            tracer = setup_tracing(observability.otel_service_name, observability.otel_endpoint)
        else:
            tracer = get_tracer()

        if metrics is None:
            if observability.metrics_enabled:
                metrics = setup_metrics(observability.metrics_port)
            else:
                metrics = get_metrics()

        store = TransactionalRecordStore(
            config.storage.database_path,
            backend=backend or SQLiteBackend(timeout=config.storage.timeout_seconds),
            metrics=metrics,
        )

        logger = get_logger("record_store")
        logger.info(
            "record_store_container_initialized",
            database=str(config.storage.database_path),
            metrics_enabled=observability.metrics_enabled,
            tracing_enabled=observability.otel_endpoint is not None,
        )

        return cls(config=config, logger=logger, tracer=tracer, metrics=metrics, store=store)
