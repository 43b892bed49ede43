"""Inference backend adapter package.

Architecture:
    InferenceBackend:
        Abstract contract: acquire(task, model_id, on_progress) returns an
        async inference callable.

    TransformersBackend:
        Default implementation built on transformers pipelines. Imported
        lazily by the factory so that torch is only loaded when serving.

Usage:
    from mmclassify.inference import create_backend

    backend = create_backend()
    classify = await backend.acquire("text-classification", model_id)
    result = await classify("Great product!")
"""

from __future__ import annotations

from .factory import create_backend
from .base import InferenceFn, InferenceBackend, ProgressCallback, emit_progress

__all__ = [
    "InferenceBackend",
    "InferenceFn",
    "ProgressCallback",
    "create_backend",
    "emit_progress",
]
