"""Centralized state dataclasses for the classification gateway.

This module re-exports all state definitions from their respective modules,
providing a single import point for state types.
"""

from .artifacts import TransientArtifact
from .models import Modality, Readiness, ModelDescriptor
from .requests import TextBatch, ImageBatch, TextSingle, ImageSingle, ClassificationRequest

__all__ = [
    "ClassificationRequest",
    "ImageBatch",
    "ImageSingle",
    "Modality",
    "ModelDescriptor",
    "Readiness",
    "TextBatch",
    "TextSingle",
    "TransientArtifact",
]
