"""Request payload validation for classification endpoints.

All checks here run before the readiness gate and before any inference
work, so malformed requests never reach the model.
"""

from __future__ import annotations

from typing import Any
from collections.abc import Sequence

from fastapi import Request, UploadFile

from mmclassify.config.limits import TEXT_BATCH_MAX, IMAGE_BATCH_MAX
from mmclassify.config.uploads import IMAGE_FIELD, IMAGES_FIELD
from mmclassify.errors import InvalidInputError
from mmclassify.state import TextBatch, TextSingle

from .uploads import validate_upload

TEXT_EXAMPLE = {"text": "This is a great product!"}
TEXTS_EXAMPLE = {"texts": ["Great product!", "Poor service"]}


async def read_json_object(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Non-object bodies are treated as empty so that field checks report the
    missing field rather than a type error on the body itself.
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidInputError("invalid_json", "Request body must be valid JSON") from exc
    return payload if isinstance(payload, dict) else {}


def validate_text_payload(payload: dict[str, Any]) -> TextSingle:
    """Require a non-empty ``text`` string."""
    text = payload.get("text")
    if not isinstance(text, str) or not text:
        raise InvalidInputError(
            "invalid_text",
            "Missing or invalid text field",
            example=TEXT_EXAMPLE,
        )
    return TextSingle(text=text)


def validate_texts_payload(
    payload: dict[str, Any],
    *,
    max_items: int = TEXT_BATCH_MAX,
) -> TextBatch:
    """Require a non-empty ``texts`` list of strings within the batch limit."""
    texts = payload.get("texts")
    if not isinstance(texts, list) or not texts:
        raise InvalidInputError(
            "invalid_texts",
            "Missing or invalid texts field (must be non-empty array)",
            example=TEXTS_EXAMPLE,
        )
    if len(texts) > max_items:
        raise InvalidInputError(
            "too_many_texts",
            f"Maximum {max_items} texts allowed per batch",
        )
    if not all(isinstance(item, str) for item in texts):
        raise InvalidInputError(
            "invalid_texts_item",
            "Every entry in texts must be a string",
            example=TEXTS_EXAMPLE,
        )
    return TextBatch(texts=list(texts))


def validate_image_upload(upload: UploadFile | None) -> UploadFile:
    """Require exactly one image under the ``image`` field."""
    if upload is None or not upload.filename:
        raise InvalidInputError(
            "missing_image",
            "No image file provided",
            note=f'Send image as multipart/form-data with field name "{IMAGE_FIELD}"',
        )
    validate_upload(upload)
    return upload


def validate_image_uploads(
    uploads: Sequence[UploadFile] | None,
    *,
    max_files: int = IMAGE_BATCH_MAX,
) -> list[UploadFile]:
    """Require 1..max_files images under the ``images`` field."""
    files = [upload for upload in (uploads or []) if upload is not None and upload.filename]
    if not files:
        raise InvalidInputError(
            "missing_images",
            "No image files provided",
            note=f'Send images as multipart/form-data with field name "{IMAGES_FIELD}"',
        )
    if len(files) > max_files:
        raise InvalidInputError(
            "too_many_files",
            f"Too many files. Maximum {max_files} files per batch.",
        )
    for upload in files:
        validate_upload(upload)
    return files


__all__ = [
    "TEXT_EXAMPLE",
    "TEXTS_EXAMPLE",
    "read_json_object",
    "validate_text_payload",
    "validate_texts_payload",
    "validate_image_upload",
    "validate_image_uploads",
]
