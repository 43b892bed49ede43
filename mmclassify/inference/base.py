"""Inference backend contract.

The gateway never runs a classification algorithm itself. A backend turns a
(task, model id) pair into an async inference callable; the callable accepts a
single input (text or image path) or a list of inputs and returns the
backend's native result shape, typically ``{"label": ..., "score": ...}``
dicts or lists of them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

InferenceInput = str | list[str]
InferenceFn = Callable[..., Awaitable[Any]]
ProgressCallback = Callable[[dict[str, Any]], None]


class InferenceBackend(ABC):
    """Materializes inference callables for a task and model."""

    name: str = "base"

    @abstractmethod
    async def acquire(
        self,
        task: str,
        model_id: str,
        on_progress: ProgressCallback | None = None,
    ) -> InferenceFn:
        """Load the model and return its inference callable.

        Args:
            task: Task name understood by the backend.
            model_id: Model identifier or local path.
            on_progress: Optional observer invoked with
                ``{"status", "name", "progress"}`` dicts. Backends emit at
                least ``initiate`` and ``done``; finer events are optional.
        """
        ...


def emit_progress(
    callback: ProgressCallback | None,
    status: str,
    name: str,
    progress: float,
) -> None:
    """Invoke a progress callback without letting it affect control flow."""
    if callback is None:
        return
    try:
        callback({"status": status, "name": name, "progress": progress})
    except Exception as exc:  # noqa: BLE001 - observers must not break loading
        logger.debug("progress callback failed for %s: %s", name, exc)


__all__ = [
    "InferenceBackend",
    "InferenceFn",
    "InferenceInput",
    "ProgressCallback",
    "emit_progress",
]
