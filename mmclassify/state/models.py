"""Model lifecycle state types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Modality(str, Enum):
    """Classification pipelines, each with independent model state."""

    TEXT = "text"
    IMAGE = "image"


class Readiness(str, Enum):
    """Outcome of the readiness gate for one modality."""

    READY = "ready"
    LOADING = "loading"
    UNINITIALIZED = "uninitialized"


@dataclass(frozen=True, slots=True)
class ModelDescriptor:
    """Static identity of the inference capability behind a modality.

    Attributes:
        modality: Which pipeline this descriptor configures.
        task: Backend task name (e.g. "text-classification").
        model_id: Hugging Face model ID or local path.
        description: Human-readable summary for /models/info.
    """

    modality: Modality
    task: str
    model_id: str
    description: str = ""


__all__ = ["Modality", "Readiness", "ModelDescriptor"]
