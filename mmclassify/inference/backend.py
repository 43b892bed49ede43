"""Hugging Face transformers inference backend.

Loads a ``transformers.pipeline`` for the requested task and wraps it in an
async callable. Both model loading and inference are synchronous and
blocking, so they run in a worker thread to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import torch  # type: ignore[import]
from transformers import pipeline  # type: ignore[import]

from .base import InferenceBackend, InferenceInput, ProgressCallback, emit_progress

logger = logging.getLogger(__name__)


class PipelineRunner:
    """Async wrapper around a loaded transformers pipeline."""

    def __init__(self, pipe: Any, model_id: str) -> None:
        self._pipe = pipe
        self.model_id = model_id

    async def __call__(self, inputs: InferenceInput, **options: Any) -> Any:
        return await asyncio.to_thread(self._pipe, inputs, **options)

    def __repr__(self) -> str:
        return f"PipelineRunner(model_id={self.model_id!r})"


class TransformersBackend(InferenceBackend):
    """Backend that builds transformers pipelines on CPU or CUDA.

    Attributes:
        device: Target device string ("cpu", "cuda", "cuda:1", ...).
    """

    name = "transformers"

    def __init__(self, device: str | None = None) -> None:
        self.device = device or ("cuda" if torch.cuda.is_available() else "cpu")

    def _build_pipeline(self, task: str, model_id: str) -> Any:
        return pipeline(task, model=model_id, device=self.device)

    async def acquire(
        self,
        task: str,
        model_id: str,
        on_progress: ProgressCallback | None = None,
    ) -> PipelineRunner:
        """Build the pipeline in a worker thread.

        ``on_progress`` sees ``initiate`` before loading starts and ``done``
        once the pipeline is built. Per-file download progress is not
        reported; ``pipeline()`` downloads inside the thread without a hook.
        """
        emit_progress(on_progress, "initiate", model_id, 0.0)
        logger.info("backend: loading task=%s model=%s device=%s", task, model_id, self.device)
        pipe = await asyncio.to_thread(self._build_pipeline, task, model_id)
        emit_progress(on_progress, "done", model_id, 100.0)
        return PipelineRunner(pipe, model_id)


__all__ = ["PipelineRunner", "TransformersBackend"]
