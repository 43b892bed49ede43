"""Runtime dependency bootstrap.

Building the dependency container is cheap and synchronous; it only wires
registries, limiters and the artifact manager together. Model acquisition is
scheduled separately so the server can accept traffic (and answer 503) while
models load in the background.

Startup loading order:
    1. Both registries are marked loading in the same event-loop step
    2. The image model is acquired first
    3. The text model is acquired once the image attempt settles, whatever
       its outcome
    4. A text smoke test runs when warmup is enabled and text is ready
"""

from __future__ import annotations

import asyncio
import logging

from mmclassify.config import (
    TEXT_TASK,
    TEXT_MODEL,
    IMAGE_TASK,
    IMAGE_MODEL,
    UPLOAD_DIR,
    MODEL_WARMUP,
    UPLOAD_CLEANUP_DELAY_S,
    TEXT_MODEL_DESCRIPTION,
    IMAGE_MODEL_DESCRIPTION,
    UPLOAD_PURGE_ON_SHUTDOWN,
    MAX_CONCURRENT_INFERENCES,
)
from mmclassify.inference import InferenceBackend, create_backend
from mmclassify.models import ModelRegistry, warm_text_model
from mmclassify.state import Modality, ModelDescriptor
from mmclassify.handlers.limits import InferenceLimiter
from mmclassify.handlers.artifacts import ArtifactManager

from .dependencies import RuntimeDeps

logger = logging.getLogger(__name__)


def build_runtime_deps(backend: InferenceBackend | None = None) -> RuntimeDeps:
    """Wire registries, limiters and the artifact manager from config."""
    backend = backend or create_backend()
    text = ModelRegistry(
        ModelDescriptor(Modality.TEXT, TEXT_TASK, TEXT_MODEL, TEXT_MODEL_DESCRIPTION),
        backend,
    )
    image = ModelRegistry(
        ModelDescriptor(Modality.IMAGE, IMAGE_TASK, IMAGE_MODEL, IMAGE_MODEL_DESCRIPTION),
        backend,
    )
    limiters = {
        modality: InferenceLimiter(modality.value, MAX_CONCURRENT_INFERENCES)
        for modality in Modality
    }
    artifacts = ArtifactManager(
        UPLOAD_DIR,
        cleanup_delay_s=UPLOAD_CLEANUP_DELAY_S,
        purge_on_shutdown=UPLOAD_PURGE_ON_SHUTDOWN,
    )
    return RuntimeDeps(text=text, image=image, artifacts=artifacts, limiters=limiters)


async def _finish_loading(
    deps: RuntimeDeps,
    acquisitions: list[asyncio.Task],
    warmup: bool,
) -> dict[str, bool]:
    # Cancelling the loader must not cancel registry acquisitions.
    await asyncio.gather(*(asyncio.shield(task) for task in acquisitions), return_exceptions=True)
    results = {registry.modality.value: registry.loaded for registry in deps.startup_order()}
    if warmup and results.get(Modality.TEXT.value):
        await warm_text_model(deps.text)
    logger.info("bootstrap: model loading finished %s", results)
    return results


def schedule_model_loading(deps: RuntimeDeps, *, warmup: bool = MODEL_WARMUP) -> asyncio.Task[dict[str, bool]]:
    """Start acquisition for every modality and return the supervising task.

    Must be called from a running event loop. When it returns, every
    registry already reports ``loading``. Each modality gets exactly one
    attempt; a failed one stays failed until someone calls ``initialize``.
    """
    acquisitions: list[asyncio.Task] = []
    previous: asyncio.Task | None = None
    for registry in deps.startup_order():
        previous = registry.start(after=previous)
        acquisitions.append(previous)
    return asyncio.ensure_future(_finish_loading(deps, acquisitions, warmup))


async def load_models(deps: RuntimeDeps, *, warmup: bool = MODEL_WARMUP) -> dict[str, bool]:
    """Load every model and wait for completion.

    Returns:
        Mapping of modality name to whether its model is ready.
    """
    return await schedule_model_loading(deps, warmup=warmup)


__all__ = ["build_runtime_deps", "load_models", "schedule_model_loading"]
