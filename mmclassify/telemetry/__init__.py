"""Public telemetry API: re-exports for convenience."""

from .sentry import capture_error
from .setup import init_telemetry, shutdown_telemetry
from .traces import request_span, inference_span
from .instruments import get_metrics, initialize_metrics

__all__ = [
    "init_telemetry",
    "shutdown_telemetry",
    "capture_error",
    "get_metrics",
    "initialize_metrics",
    "request_span",
    "inference_span",
]
