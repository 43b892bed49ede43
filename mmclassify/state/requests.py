"""Classification request shapes, discriminated by modality and arity."""

from __future__ import annotations

from dataclasses import dataclass

from .artifacts import TransientArtifact


@dataclass(frozen=True, slots=True)
class TextSingle:
    text: str


@dataclass(frozen=True, slots=True)
class TextBatch:
    texts: list[str]


@dataclass(frozen=True, slots=True)
class ImageSingle:
    artifact: TransientArtifact


@dataclass(frozen=True, slots=True)
class ImageBatch:
    artifacts: list[TransientArtifact]


ClassificationRequest = TextSingle | TextBatch | ImageSingle | ImageBatch


__all__ = [
    "TextSingle",
    "TextBatch",
    "ImageSingle",
    "ImageBatch",
    "ClassificationRequest",
]
