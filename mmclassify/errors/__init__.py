"""Centralized exception classes for the classification gateway.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - validation.py: Malformed or over-limit requests (HTTP 400)
    - not_ready.py: Model loading or uninitialized (HTTP 503)
    - inference.py: Backend failures (HTTP 500) and cleanup failures (logged)
    - classify.py: Exception-to-telemetry label mapping
"""

from .classify import classify_error
from .validation import InvalidInputError
from .inference import InferenceError, ArtifactCleanupError
from .not_ready import REASON_LOADING, REASON_UNINITIALIZED, ModelNotReadyError

__all__ = [
    # Validation
    "InvalidInputError",
    # Readiness
    "ModelNotReadyError",
    "REASON_LOADING",
    "REASON_UNINITIALIZED",
    # Inference
    "InferenceError",
    "ArtifactCleanupError",
    # Classification
    "classify_error",
]
