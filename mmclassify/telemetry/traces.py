"""Span context managers for request and inference tracing."""

from __future__ import annotations

from typing import Any
from opentelemetry import trace
from collections.abc import Iterator
from contextlib import contextmanager
from ..config.telemetry import SPAN_REQUEST, SPAN_INFERENCE, OTEL_SERVICE_NAME


def _tracer() -> trace.Tracer:
    return trace.get_tracer(OTEL_SERVICE_NAME)


@contextmanager
def request_span(*, request_id: str, request_type: str) -> Iterator[trace.Span]:
    """Per-request span wrapping gate, dispatch and envelope building."""
    attrs: dict[str, Any] = {"request.id": request_id, "request.type": request_type}
    with _tracer().start_as_current_span(SPAN_REQUEST, attributes=attrs) as span:
        yield span


@contextmanager
def inference_span(*, modality: str, model: str = "", batch_size: int = 1) -> Iterator[trace.Span]:
    """Inference backend call span."""
    attrs: dict[str, Any] = {"modality": modality, "batch_size": batch_size}
    if model:
        attrs["model"] = model
    with _tracer().start_as_current_span(SPAN_INFERENCE, attributes=attrs) as span:
        yield span


__all__ = ["request_span", "inference_span"]
