"""Exception classification helpers for metrics and telemetry labels."""

from __future__ import annotations

from .validation import InvalidInputError
from .not_ready import ModelNotReadyError
from .inference import InferenceError, ArtifactCleanupError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (InvalidInputError, "invalid_input"),
    (ModelNotReadyError, "not_ready"),
    (InferenceError, "inference"),
    (ArtifactCleanupError, "cleanup"),
    (TimeoutError, "timeout"),
    (OSError, "io"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a metric-friendly category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
