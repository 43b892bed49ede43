"""Static and state-derived bodies for the informational endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mmclassify.config import (
    SERVICE_NAME,
    SERVICE_VERSION,
    IMAGE_BATCH_MAX,
    TEXT_MODEL_LABELS,
    IMAGE_SUPPORTED_FORMATS,
)
from mmclassify.config.uploads import IMAGE_FIELD, IMAGES_FIELD

from .envelope import (
    TEXT_CLASSIFICATION,
    IMAGE_CLASSIFICATION,
    TEXT_CLASSIFICATION_BATCH,
    IMAGE_CLASSIFICATION_BATCH,
    utc_timestamp,
)

if TYPE_CHECKING:
    from mmclassify.models import ModelRegistry
    from mmclassify.runtime.dependencies import RuntimeDeps

ENDPOINTS = {
    "health": "GET /health",
    "textClassify": "POST /classify/text",
    "textBatch": "POST /classify/text/batch",
    "imageClassify": "POST /classify/image",
    "imageBatch": "POST /classify/image/batch",
    "info": "GET /models/info",
    "examples": "GET /examples",
}


def service_descriptor() -> dict[str, Any]:
    return {
        "message": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "capabilities": [TEXT_CLASSIFICATION, IMAGE_CLASSIFICATION],
        "endpoints": dict(ENDPOINTS),
    }


def health_report(deps: RuntimeDeps) -> dict[str, Any]:
    return {"status": "healthy", "models": deps.health(), "timestamp": utc_timestamp()}


def _model_entry(registry: ModelRegistry) -> dict[str, Any]:
    descriptor = registry.descriptor
    return {
        "model": descriptor.model_id,
        "task": descriptor.task,
        **registry.status(),
        "description": descriptor.description,
    }


def models_info(deps: RuntimeDeps) -> dict[str, Any]:
    """Model identity and lifecycle state per modality."""
    return {
        "textClassification": {**_model_entry(deps.text), "labels": list(TEXT_MODEL_LABELS)},
        "imageClassification": {
            **_model_entry(deps.image),
            "supportedFormats": list(IMAGE_SUPPORTED_FORMATS),
        },
    }


def usage_examples() -> dict[str, Any]:
    """Request and response samples for each classification endpoint."""
    return {
        "textClassification": {
            "single": {
                "endpoint": ENDPOINTS["textClassify"],
                "body": {"text": "This product is amazing!"},
                "response": {
                    "success": True,
                    "type": TEXT_CLASSIFICATION,
                    "input": "This product is amazing!",
                    "result": [{"label": "POSITIVE", "score": 0.9991}],
                },
            },
            "batch": {
                "endpoint": ENDPOINTS["textBatch"],
                "body": {"texts": ["Great!", "Terrible!"]},
                "response": {
                    "success": True,
                    "type": TEXT_CLASSIFICATION_BATCH,
                    "count": 2,
                    "results": [
                        {"label": "POSITIVE", "score": 0.9998},
                        {"label": "NEGATIVE", "score": 0.9994},
                    ],
                },
            },
        },
        "imageClassification": {
            "single": {
                "endpoint": ENDPOINTS["imageClassify"],
                "method": "multipart/form-data",
                "field": IMAGE_FIELD,
                "response": {
                    "success": True,
                    "type": IMAGE_CLASSIFICATION,
                    "filename": "image-1700000000000-123456.jpg",
                    "result": [
                        {"label": "Egyptian cat", "score": 0.8234},
                        {"label": "tabby, tabby cat", "score": 0.1543},
                    ],
                },
            },
            "batch": {
                "endpoint": ENDPOINTS["imageBatch"],
                "method": "multipart/form-data",
                "field": IMAGES_FIELD,
                "type": IMAGE_CLASSIFICATION_BATCH,
                "note": f"Maximum {IMAGE_BATCH_MAX} images per batch",
            },
        },
    }


__all__ = ["ENDPOINTS", "health_report", "models_info", "service_descriptor", "usage_examples"]
