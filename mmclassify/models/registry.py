"""Per-modality model registry with single-flight acquisition.

A registry owns the inference callable for one modality. The first caller
schedules acquisition and every later caller, concurrent or not, awaits the
same memoized task, so the backend is asked to load the model at most once
per successful acquisition.

State model:
    - instance is None, no task        -> uninitialized
    - task scheduled and not done      -> loading
    - instance assigned                -> ready (instance never changes again)

If acquisition fails the task is discarded, the instance stays None and the
registry returns to the uninitialized state. Nothing retries automatically;
a later explicit ``initialize()`` or ``get_instance()`` starts a new attempt.

The check-then-schedule step in ``start()`` contains no await, so on a single
event loop no two callers can both observe "no task" and both schedule one.

Usage:
    registry = ModelRegistry(descriptor, backend)
    classify = await registry.get_instance()
    result = await classify("Great product!")
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable
from typing import Any

from mmclassify.errors import classify_error
from mmclassify.inference.base import InferenceFn, InferenceBackend, ProgressCallback
from mmclassify.state import Modality, ModelDescriptor
from mmclassify.telemetry import capture_error, get_metrics

logger = logging.getLogger(__name__)

_LOGGED_PROGRESS_STATUSES = {"initiate", "download", "downloading", "progress", "done"}


class ModelRegistry:
    """Lazily acquires and memoizes the inference callable for one modality.

    Attributes:
        descriptor: Task and model identity for this modality.
        last_error: Exception from the most recent failed acquisition, if any.
    """

    def __init__(
        self,
        descriptor: ModelDescriptor,
        backend: InferenceBackend,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.last_error: BaseException | None = None
        self._backend = backend
        self._on_progress = on_progress or self._log_progress
        self._instance: InferenceFn | None = None
        self._acquisition: asyncio.Task[InferenceFn] | None = None

    # ============================================================================
    # State accessors
    # ============================================================================

    @property
    def modality(self) -> Modality:
        return self.descriptor.modality

    @property
    def instance(self) -> InferenceFn | None:
        return self._instance

    @property
    def loading(self) -> bool:
        """True between acquisition start and completion (success or failure)."""
        task = self._acquisition
        return task is not None and not task.done()

    @property
    def loaded(self) -> bool:
        return self._instance is not None

    def status(self) -> dict[str, bool]:
        return {"loaded": self.loaded, "loading": self.loading}

    # ============================================================================
    # Acquisition
    # ============================================================================

    def start(self, *, after: Awaitable[Any] | None = None) -> asyncio.Task[InferenceFn]:
        """Schedule acquisition unless one is in flight or already succeeded.

        Args:
            after: Optional awaitable that must settle (success or failure)
                before the backend is called. Used to serialize startup
                loading across modalities while both report ``loading``.

        Returns:
            The memoized acquisition task shared by every caller.
        """
        task = self._acquisition
        if task is None or (task.done() and self._instance is None):
            task = asyncio.ensure_future(self._acquire(after))
            self._acquisition = task
        return task

    async def get_instance(self) -> InferenceFn:
        """Return the inference callable, acquiring it on first use.

        Concurrent callers share one acquisition. Cancelling one caller does
        not cancel the shared task.

        Raises:
            Exception: Whatever the backend raised if acquisition failed.
        """
        if self._instance is not None:
            return self._instance
        return await asyncio.shield(self.start())

    async def initialize(self) -> bool:
        """Acquire the model, logging instead of raising on failure.

        Returns:
            True when the model is ready afterwards.
        """
        try:
            await self.get_instance()
        except Exception:  # noqa: BLE001 - already logged and reported in _acquire
            return False
        return True

    async def shutdown(self) -> None:
        """Cancel an in-flight acquisition. The loaded instance is kept."""
        task = self._acquisition
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

    async def _acquire(self, after: Awaitable[Any] | None) -> InferenceFn:
        if after is not None:
            await asyncio.wait([asyncio.ensure_future(after)])

        name = self.modality.value
        start = time.perf_counter()
        logger.info(
            "registry: loading %s model task=%s model=%s",
            name,
            self.descriptor.task,
            self.descriptor.model_id,
        )
        try:
            instance = await self._backend.acquire(
                self.descriptor.task,
                self.descriptor.model_id,
                self._on_progress,
            )
        except Exception as exc:
            self._acquisition = None
            self.last_error = exc
            get_metrics().model_load_failures_total.add(
                1, {"modality": name, "error_type": classify_error(exc)}
            )
            logger.exception("registry: failed to load %s model %s", name, self.descriptor.model_id)
            capture_error(exc, modality=name, extra={"model": self.descriptor.model_id})
            raise

        elapsed = time.perf_counter() - start
        self._instance = instance
        self.last_error = None
        get_metrics().model_load_duration.record(elapsed, {"modality": name})
        logger.info("registry: %s model ready in %.2fs", name, elapsed)
        return instance

    def _log_progress(self, event: dict[str, Any]) -> None:
        status = event.get("status")
        if status not in _LOGGED_PROGRESS_STATUSES:
            return
        progress = event.get("progress") or 0.0
        logger.info(
            "registry: %s model %s %s - %d%%",
            self.modality.value,
            event.get("name", self.descriptor.model_id),
            status,
            round(float(progress)),
        )

    def __repr__(self) -> str:
        return (
            f"ModelRegistry(modality={self.modality.value!r}, "
            f"model_id={self.descriptor.model_id!r}, loaded={self.loaded}, loading={self.loading})"
        )


__all__ = ["ModelRegistry"]
