"""
Prometheus metrics integration for Stowage.

Counts how files reach their storages, so operators can see how often a
wanted move degrades into a copy.

Quick Start:
    >>> from stowage.monitoring.prometheus import PrometheusMetrics, start_metrics_server
    >>>
    >>> start_metrics_server(port=8000)
    >>> metrics = PrometheusMetrics()
    >>> service = TransferService(storages, policy, metrics=metrics)
"""

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, start_http_server

from stowage.core.logger import get_logger

logger = get_logger(__name__)


class PrometheusMetrics:
    """
    Prometheus-compatible metrics collector for transfers.

    Exposes the following metrics:
        - <prefix>_transfers_total: Counter of completed transfers by storage and strategy
        - <prefix>_fallbacks_total: Counter of moves that fell back to copying
        - <prefix>_source_delete_failures_total: Counter of failed source cleanups
        - <prefix>_transfer_duration_seconds: Histogram of transfer durations
    """

    def __init__(self, prefix: str = "stowage", registry: CollectorRegistry | None = None):
        """
        Initialize Prometheus metrics.

        Args:
            prefix: Metric name prefix (default: "stowage")
            registry: Registry to register with (default: the global registry)
        """
        self._prefix = prefix
        registry = registry if registry is not None else REGISTRY

        self._transfers_total = Counter(
            f"{prefix}_transfers_total",
            "Total completed transfers",
            ["storage_key", "strategy"],
            registry=registry,
        )

        self._fallbacks_total = Counter(
            f"{prefix}_fallbacks_total",
            "Transfers where a wanted move fell back to copying",
            ["storage_key"],
            registry=registry,
        )

        self._delete_failures_total = Counter(
            f"{prefix}_source_delete_failures_total",
            "Sources that could not be deleted after a fallback copy",
            ["storage_key"],
            registry=registry,
        )

        self._transfer_duration = Histogram(
            f"{prefix}_transfer_duration_seconds",
            "Transfer duration in seconds",
            ["storage_key", "strategy"],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
            registry=registry,
        )

    def record_transfer(self, storage_key: str, strategy: str, duration: float) -> None:
        """
        Record a completed transfer.

        Args:
            storage_key: Destination storage
            strategy: Strategy used ("move", "copy", "copy_then_delete")
            duration: Transfer duration in seconds
        """
        self._transfers_total.labels(storage_key=storage_key, strategy=strategy).inc()
        self._transfer_duration.labels(storage_key=storage_key, strategy=strategy).observe(duration)

    def record_fallback(self, storage_key: str) -> None:
        self._fallbacks_total.labels(storage_key=storage_key).inc()

    def record_delete_failure(self, storage_key: str) -> None:
        self._delete_failures_total.labels(storage_key=storage_key).inc()


def start_metrics_server(port: int = 8000, addr: str = "0.0.0.0") -> None:
    """
    Start a Prometheus HTTP metrics server.

    Args:
        port: Port to listen on (default: 8000)
        addr: Address to bind to (default: 0.0.0.0 for all interfaces)
    """
    start_http_server(port, addr)
    logger.info(f"Prometheus metrics server started on port {port}")
