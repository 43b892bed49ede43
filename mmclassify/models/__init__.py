"""Model lifecycle: per-modality registry, readiness gate and warmup."""

from __future__ import annotations

from .registry import ModelRegistry
from .warmup import warm_text_model
from .gate import check_ready, require_ready

__all__ = [
    "ModelRegistry",
    "check_ready",
    "require_ready",
    "warm_text_model",
]
