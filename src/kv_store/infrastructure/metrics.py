"""Prometheus metrics for the key-value store."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all key-value store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or REGISTRY

        self.operations_total = Counter(
            "kv_operations_total",
            "Total number of store operations",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "kv_operation_latency_seconds",
            "Store operation latency in seconds",
            ["operation"],  # open, set, get, list, close
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.get_misses_total = Counter(
            "kv_get_misses_total",
            "Lookups that found no record for the key",
            registry=self._registry,
        )

        self.open_stores = Gauge(
            "kv_open_stores",
            "Number of store handles currently open",
            registry=self._registry,
        )

        self.info = Info(
            "kv_store",
            "Key-value store information",
            registry=self._registry,
        )

        from kv_store import __version__
        self.info.info({"version": __version__})

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry the metrics are attached to."""
        return self._registry


_metrics: MetricsRegistry | None = None
_http_ports: set[int] = set()


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Bind the process-wide metrics and start the scrape endpoint.

    Metrics already registered on the same collector registry (for example
    by a store opened before the container) are reused, and the endpoint is
    started at most once per port.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    target = registry or REGISTRY
    if _metrics is None or _metrics.registry is not target:
        _metrics = MetricsRegistry(target)

    if port not in _http_ports:
        start_http_server(port, registry=target)
        _http_ports.add(port)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the process-wide metrics registry, creating it on first use."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
