"""Request dispatch: readiness gate, inference invocation and envelopes.

Each request flows through the same stages, cheapest first:

1. Payload validation (400 on failure, no model or disk work)
2. Readiness gate for the modality (503 while loading or uninitialized)
3. Image requests only: uploads written to disk inside an artifact scope
4. One inference call (text, text batch, single image) or one call per
   image in submission order (image batch)
5. Envelope with the measured inference wall-clock time

Any exception from the backend becomes an ``InferenceError`` (500). Batches
are atomic: a failure on one item discards the results of earlier items.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from fastapi import UploadFile

from mmclassify.config.uploads import IMAGE_FIELD, IMAGES_FIELD
from mmclassify.errors import InferenceError
from mmclassify.inference import InferenceFn
from mmclassify.logging import current_request_id
from mmclassify.models import ModelRegistry, require_ready
from mmclassify.state import TextBatch, ImageBatch, TextSingle, ImageSingle
from mmclassify.telemetry import capture_error, get_metrics, request_span, inference_span

from .uploads import save_upload
from .envelope import (
    TEXT_CLASSIFICATION,
    IMAGE_CLASSIFICATION,
    TEXT_CLASSIFICATION_BATCH,
    IMAGE_CLASSIFICATION_BATCH,
    build_envelope,
)
from .validation import (
    validate_text_payload,
    validate_image_upload,
    validate_texts_payload,
    validate_image_uploads,
)

if TYPE_CHECKING:
    from mmclassify.runtime.dependencies import RuntimeDeps

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ============================================================================
# Inference invocation
# ============================================================================

async def _invoke(
    deps: RuntimeDeps,
    registry: ModelRegistry,
    operation: str,
    call: Callable[[], Awaitable[T]],
    *,
    batch_size: int,
) -> tuple[T, int]:
    """Run ``call`` under the modality's limiter and time it.

    Returns:
        Tuple of (backend output, elapsed milliseconds).

    Raises:
        InferenceError: Wrapping whatever the backend raised.
    """
    modality = registry.modality.value
    metrics = get_metrics()
    async with deps.limiter(registry.modality).slot():
        with inference_span(modality=modality, model=registry.descriptor.model_id, batch_size=batch_size):
            start = time.perf_counter()
            try:
                output = await call()
            except Exception as exc:
                metrics.errors_total.add(1, {"modality": modality, "error_type": "inference"})
                logger.exception("dispatch: %s failed (batch_size=%s)", operation, batch_size)
                capture_error(exc, modality=modality, extra={"operation": operation})
                raise InferenceError(operation, str(exc)) from exc
            elapsed = time.perf_counter() - start
    metrics.inference_latency.record(elapsed, {"modality": modality})
    return output, int(round(elapsed * 1000))


# ============================================================================
# Dispatch per request shape
# ============================================================================

async def dispatch_text(deps: RuntimeDeps, request: TextSingle) -> dict[str, Any]:
    """Classify one text. The backend's result shape is returned as-is."""
    registry = deps.text
    classify = require_ready(registry)
    result, elapsed_ms = await _invoke(
        deps,
        registry,
        "Text classification",
        lambda: classify(request.text),
        batch_size=1,
    )
    return build_envelope(TEXT_CLASSIFICATION, elapsed_ms=elapsed_ms, input=request.text, result=result)


async def dispatch_text_batch(deps: RuntimeDeps, request: TextBatch) -> dict[str, Any]:
    """Classify all texts in a single backend call; results keep input order."""
    registry = deps.text
    classify = require_ready(registry)
    results, elapsed_ms = await _invoke(
        deps,
        registry,
        "Text batch classification",
        lambda: classify(request.texts),
        batch_size=len(request.texts),
    )
    if not isinstance(results, list):
        results = [results]
    return build_envelope(
        TEXT_CLASSIFICATION_BATCH,
        elapsed_ms=elapsed_ms,
        inputs=request.texts,
        results=results,
    )


async def dispatch_image(
    deps: RuntimeDeps,
    request: ImageSingle,
    classify: InferenceFn | None = None,
) -> dict[str, Any]:
    """Classify one stored image by path.

    ``classify`` is the callable an earlier readiness check returned; the
    gate runs here only when it is omitted.
    """
    registry = deps.image
    if classify is None:
        classify = require_ready(registry)
    artifact = request.artifact
    result, elapsed_ms = await _invoke(
        deps,
        registry,
        "Image classification",
        lambda: classify(artifact.path),
        batch_size=1,
    )
    return build_envelope(IMAGE_CLASSIFICATION, elapsed_ms=elapsed_ms, **artifact.describe(), result=result)


async def dispatch_image_batch(
    deps: RuntimeDeps,
    request: ImageBatch,
    classify: InferenceFn | None = None,
) -> dict[str, Any]:
    """Classify stored images one at a time, in submission order."""
    registry = deps.image
    if classify is None:
        classify = require_ready(registry)

    async def _classify_each() -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        for artifact in request.artifacts:
            output = await classify(artifact.path)
            items.append({**artifact.describe(), "result": output})
        return items

    results, elapsed_ms = await _invoke(
        deps,
        registry,
        "Image batch classification",
        _classify_each,
        batch_size=len(request.artifacts),
    )
    return build_envelope(IMAGE_CLASSIFICATION_BATCH, elapsed_ms=elapsed_ms, results=results)


# ============================================================================
# Request entry points
# ============================================================================

def _count_request(request_type: str) -> None:
    get_metrics().requests_total.add(1, {"type": request_type})


async def handle_text(deps: RuntimeDeps, payload: dict[str, Any]) -> dict[str, Any]:
    _count_request(TEXT_CLASSIFICATION)
    with request_span(request_id=current_request_id(), request_type=TEXT_CLASSIFICATION):
        request = validate_text_payload(payload)
        return await dispatch_text(deps, request)


async def handle_text_batch(deps: RuntimeDeps, payload: dict[str, Any]) -> dict[str, Any]:
    _count_request(TEXT_CLASSIFICATION_BATCH)
    with request_span(request_id=current_request_id(), request_type=TEXT_CLASSIFICATION_BATCH):
        request = validate_texts_payload(payload)
        return await dispatch_text_batch(deps, request)


async def handle_image(deps: RuntimeDeps, upload: UploadFile | None) -> dict[str, Any]:
    """Validate, gate, store and classify a single uploaded image."""
    _count_request(IMAGE_CLASSIFICATION)
    with request_span(request_id=current_request_id(), request_type=IMAGE_CLASSIFICATION):
        upload = validate_image_upload(upload)
        classify = require_ready(deps.image)
        async with deps.artifacts.hold() as scope:
            artifact = await save_upload(upload, deps.artifacts, scope, fieldname=IMAGE_FIELD)
            return await dispatch_image(deps, ImageSingle(artifact=artifact), classify)


async def handle_image_batch(deps: RuntimeDeps, uploads: list[UploadFile] | None) -> dict[str, Any]:
    """Validate, gate, store and classify up to IMAGE_BATCH_MAX images."""
    _count_request(IMAGE_CLASSIFICATION_BATCH)
    with request_span(request_id=current_request_id(), request_type=IMAGE_CLASSIFICATION_BATCH):
        files = validate_image_uploads(uploads)
        classify = require_ready(deps.image)
        async with deps.artifacts.hold() as scope:
            artifacts = [
                await save_upload(upload, deps.artifacts, scope, fieldname=IMAGES_FIELD)
                for upload in files
            ]
            return await dispatch_image_batch(deps, ImageBatch(artifacts=artifacts), classify)


__all__ = [
    "dispatch_text",
    "dispatch_text_batch",
    "dispatch_image",
    "dispatch_image_batch",
    "handle_text",
    "handle_text_batch",
    "handle_image",
    "handle_image_batch",
]
