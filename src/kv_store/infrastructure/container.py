"""Process-wide wiring of configuration and observability."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from opentelemetry import trace

from kv_store.infrastructure.config import Config, get_config
from kv_store.infrastructure.logging import get_logger, setup_logging
from kv_store.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from kv_store.infrastructure.tracing import get_tracer, setup_tracing

if TYPE_CHECKING:
    from kv_store.application.key_value_store import KeyValueStore


@dataclass
class Container:
    """Holds the configuration, tracer and metrics shared by store handles."""

    config: Config
    tracer: trace.Tracer
    metrics: MetricsRegistry

    _instance: ClassVar[Container | None] = None

    @classmethod
    def create(cls, config: Config | None = None) -> Container:
        """Configure logging, tracing and metrics once per process.

        The Prometheus endpoint is only started when
        ``observability.metrics_enabled`` is set, and spans are only
        exported when ``observability.otel_endpoint`` is configured.
        """
        if cls._instance is not None:
            return cls._instance

        config = config or get_config()
        observability = config.observability

        setup_logging(observability)

        if observability.otel_endpoint:
            tracer = setup_tracing(
                service_name=observability.otel_service_name,
                otlp_endpoint=observability.otel_endpoint,
            )
        else:
            tracer = get_tracer()

        if observability.metrics_enabled:
            metrics = setup_metrics(port=observability.metrics_port)
        else:
            metrics = get_metrics()

        cls._instance = cls(config=config, tracer=tracer, metrics=metrics)

        get_logger("container").info(
            "kv_store_container_initialized",
            database_path=str(config.storage.database_path),
            metrics_enabled=observability.metrics_enabled,
            tracing_exported=bool(observability.otel_endpoint),
        )

        return cls._instance

    @classmethod
    def get(cls) -> Container:
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None

    def open_store(self, path: str | Path | None = None) -> KeyValueStore:
        """Open a store handle using this container's config and metrics."""
        from kv_store.application.key_value_store import KeyValueStore

        return KeyValueStore.open(path, config=self.config, metrics=self.metrics)


def get_container() -> Container:
    """Get the process-wide container."""
    return Container.get()
