"""
Observability for storage transfers: structured logs and Prometheus metrics.
"""

from .logging import TransferJsonFormatter, setup_transfer_logging, transfer_context
from .prometheus import PrometheusMetrics, start_metrics_server

__all__ = [
    "PrometheusMetrics",
    "TransferJsonFormatter",
    "setup_transfer_logging",
    "start_metrics_server",
    "transfer_context",
]
