"""Factory for the configured inference backend."""

from __future__ import annotations

from .base import InferenceBackend


def create_backend() -> InferenceBackend:
    """Create the inference backend using config values from environment."""
    from mmclassify.config import INFERENCE_DEVICE  # noqa: PLC0415
    from .backend import TransformersBackend  # noqa: PLC0415

    return TransformersBackend(device=INFERENCE_DEVICE or None)


__all__ = ["create_backend"]
