"""Model selection for each classification modality.

Each modality is described by a (task, model id) pair handed to the
inference backend. The pairs are fixed for the life of the process.
"""

import os


TEXT_TASK = os.getenv("TEXT_TASK", "text-classification")
TEXT_MODEL = os.getenv("TEXT_MODEL", "distilbert-base-uncased-finetuned-sst-2-english")

IMAGE_TASK = os.getenv("IMAGE_TASK", "image-classification")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "google/vit-base-patch16-224")

# Empty means "cuda when available, else cpu"
INFERENCE_DEVICE = (os.getenv("INFERENCE_DEVICE", "") or "").strip().lower()

TEXT_MODEL_LABELS = ("POSITIVE", "NEGATIVE")
IMAGE_SUPPORTED_FORMATS = ("jpg", "jpeg", "png", "gif", "bmp", "webp")

TEXT_MODEL_DESCRIPTION = "DistilBERT model for sentiment analysis"
IMAGE_MODEL_DESCRIPTION = "Vision Transformer for general image classification"


__all__ = [
    "TEXT_TASK",
    "TEXT_MODEL",
    "IMAGE_TASK",
    "IMAGE_MODEL",
    "INFERENCE_DEVICE",
    "TEXT_MODEL_LABELS",
    "IMAGE_SUPPORTED_FORMATS",
    "TEXT_MODEL_DESCRIPTION",
    "IMAGE_MODEL_DESCRIPTION",
]
