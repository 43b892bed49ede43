"""Readiness gate checked before any request does file-system or model work."""

from __future__ import annotations

from mmclassify.errors import REASON_LOADING, REASON_UNINITIALIZED, ModelNotReadyError
from mmclassify.inference.base import InferenceFn
from mmclassify.state import Readiness

from .registry import ModelRegistry


def check_ready(registry: ModelRegistry) -> Readiness:
    """Classify the registry as ready, loading or uninitialized."""
    if registry.instance is not None:
        return Readiness.READY
    if registry.loading:
        return Readiness.LOADING
    return Readiness.UNINITIALIZED


def require_ready(registry: ModelRegistry) -> InferenceFn:
    """Return the registry's inference callable or raise ModelNotReadyError.

    Never triggers acquisition.
    """
    state = check_ready(registry)
    instance = registry.instance
    if state is Readiness.READY and instance is not None:
        return instance
    reason = REASON_LOADING if state is Readiness.LOADING else REASON_UNINITIALIZED
    raise ModelNotReadyError(registry.modality.value, reason)


__all__ = ["check_ready", "require_ready"]
