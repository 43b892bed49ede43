"""Telemetry configuration: env vars, metric specs, span names, Sentry constants."""

import os

# ---------------------------------------------------------------------------
# Sentry
# ---------------------------------------------------------------------------
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "production")
SENTRY_RELEASE: str = os.getenv("SENTRY_RELEASE", "")
SENTRY_SAMPLE_RATE: float = float(os.getenv("SENTRY_SAMPLE_RATE", "1.0"))

# ---------------------------------------------------------------------------
# OTLP export
# ---------------------------------------------------------------------------
OTEL_TRACES_ENDPOINT: str = os.getenv("OTEL_TRACES_ENDPOINT", "")
OTEL_METRICS_ENDPOINT: str = os.getenv("OTEL_METRICS_ENDPOINT", "")
OTEL_EXPORTER_TOKEN: str = os.getenv("OTEL_EXPORTER_TOKEN", "")
OTEL_ENVIRONMENT: str = os.getenv("OTEL_ENVIRONMENT", "production")

# ---------------------------------------------------------------------------
# OTel tuning
# ---------------------------------------------------------------------------
OTEL_SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "mmclassify-api")
OTEL_TRACES_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_TRACES_EXPORT_INTERVAL_MS", "5000"))
OTEL_METRICS_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_METRICS_EXPORT_INTERVAL_MS", "15000"))
OTEL_TRACES_BATCH_SIZE: int = int(os.getenv("OTEL_TRACES_BATCH_SIZE", "512"))

# ---------------------------------------------------------------------------
# Metric spec tuples: (name, unit, description)
# ---------------------------------------------------------------------------

# Histograms
METRIC_INFERENCE_LATENCY = ("classify.inference_latency", "s", "Inference call duration")
METRIC_MODEL_LOAD_DURATION = ("classify.model_load_duration", "s", "Model acquisition time")

# Counters
METRIC_REQUESTS_TOTAL = ("classify.requests_total", "{request}", "Classification requests")
METRIC_ERRORS_TOTAL = ("classify.errors_total", "{error}", "Failed classification requests")
METRIC_MODEL_LOAD_FAILURES_TOTAL = (
    "classify.model_load_failures_total",
    "{failure}",
    "Failed model acquisitions",
)
METRIC_ARTIFACTS_CLEANED_TOTAL = (
    "classify.artifacts_cleaned_total",
    "{file}",
    "Uploaded files reclaimed",
)

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------
SPAN_REQUEST = "classify.request"
SPAN_INFERENCE = "classify.inference"

# ---------------------------------------------------------------------------
# Sentry constants
# ---------------------------------------------------------------------------
SENTRY_RATE_LIMIT_S: float = 10.0
SENTRY_TAG_REQUEST_ID = "request_id"
SENTRY_TAG_CLIENT_ID = "client_id"
SENTRY_TAG_MODALITY = "modality"


__all__ = [
    # Sentry env
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_RELEASE",
    "SENTRY_SAMPLE_RATE",
    # OTLP env
    "OTEL_TRACES_ENDPOINT",
    "OTEL_METRICS_ENDPOINT",
    "OTEL_EXPORTER_TOKEN",
    "OTEL_ENVIRONMENT",
    # OTel tuning
    "OTEL_SERVICE_NAME",
    "OTEL_TRACES_EXPORT_INTERVAL_MS",
    "OTEL_METRICS_EXPORT_INTERVAL_MS",
    "OTEL_TRACES_BATCH_SIZE",
    # Histograms
    "METRIC_INFERENCE_LATENCY",
    "METRIC_MODEL_LOAD_DURATION",
    # Counters
    "METRIC_REQUESTS_TOTAL",
    "METRIC_ERRORS_TOTAL",
    "METRIC_MODEL_LOAD_FAILURES_TOTAL",
    "METRIC_ARTIFACTS_CLEANED_TOTAL",
    # Span names
    "SPAN_REQUEST",
    "SPAN_INFERENCE",
    # Sentry constants
    "SENTRY_RATE_LIMIT_S",
    "SENTRY_TAG_REQUEST_ID",
    "SENTRY_TAG_CLIENT_ID",
    "SENTRY_TAG_MODALITY",
]
