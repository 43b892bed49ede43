"""MetricInstruments registry: typed accessors for all OTel instruments."""

from __future__ import annotations

import logging
from opentelemetry import metrics
from ..config.telemetry import (
    OTEL_SERVICE_NAME,
    METRIC_ERRORS_TOTAL,
    METRIC_REQUESTS_TOTAL,
    METRIC_INFERENCE_LATENCY,
    METRIC_MODEL_LOAD_DURATION,
    METRIC_ARTIFACTS_CLEANED_TOTAL,
    METRIC_MODEL_LOAD_FAILURES_TOTAL,
)

logger = logging.getLogger(__name__)


def _histogram(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Histogram:
    name, unit, desc = spec
    return meter.create_histogram(name, unit=unit, description=desc)


def _counter(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Counter:
    name, unit, desc = spec
    return meter.create_counter(name, unit=unit, description=desc)


class MetricInstruments:
    """Holds all OTel metric instruments created from config specs."""

    __slots__ = (
        "inference_latency",
        "model_load_duration",
        "requests_total",
        "errors_total",
        "model_load_failures_total",
        "artifacts_cleaned_total",
    )

    def __init__(self, meter: metrics.Meter) -> None:
        # Histograms
        self.inference_latency = _histogram(meter, METRIC_INFERENCE_LATENCY)
        self.model_load_duration = _histogram(meter, METRIC_MODEL_LOAD_DURATION)
        # Counters
        self.requests_total = _counter(meter, METRIC_REQUESTS_TOTAL)
        self.errors_total = _counter(meter, METRIC_ERRORS_TOTAL)
        self.model_load_failures_total = _counter(meter, METRIC_MODEL_LOAD_FAILURES_TOTAL)
        self.artifacts_cleaned_total = _counter(meter, METRIC_ARTIFACTS_CLEANED_TOTAL)


_metrics: MetricInstruments | None = None


def get_metrics() -> MetricInstruments:
    """Return the global MetricInstruments (no-op meter if OTel not initialized)."""
    global _metrics  # noqa: PLW0603
    if _metrics is None:
        meter = metrics.get_meter(OTEL_SERVICE_NAME)
        _metrics = MetricInstruments(meter)
    return _metrics


def initialize_metrics() -> None:
    """Create MetricInstruments from the global meter."""
    global _metrics  # noqa: PLW0603
    meter = metrics.get_meter(OTEL_SERVICE_NAME)
    _metrics = MetricInstruments(meter)
    logger.info("Telemetry metrics initialized")


__all__ = ["MetricInstruments", "get_metrics", "initialize_metrics"]
