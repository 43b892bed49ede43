"""Concurrency cap for inference calls against one model instance.

Requests for the same modality share a single inference callable. The cap is
optional: with ``max_concurrent=0`` the limiter admits everything, matching a
deployment that relies only on per-request sequential batch processing.

Example:
    limiter = InferenceLimiter("text", max_concurrent=4)

    async with limiter.slot():
        result = await classify(text)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class InferenceLimiter:
    """Semaphore-based admission control for inference calls.

    Attributes:
        name: Label used in log lines (usually the modality).
        max_concurrent: Maximum concurrent holders; 0 disables the cap.
    """

    def __init__(self, name: str, max_concurrent: int = 0) -> None:
        if max_concurrent < 0:
            raise ValueError("max_concurrent must be >= 0")
        self.name = name
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent) if max_concurrent else None
        self._active = 0

    @property
    def enabled(self) -> bool:
        return self._semaphore is not None

    @property
    def active(self) -> int:
        return self._active

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one inference slot for the duration of the block."""
        if self._semaphore is None:
            self._active += 1
            try:
                yield
            finally:
                self._active -= 1
            return

        if self._semaphore.locked():
            logger.debug(
                "limiter: %s at capacity (%s/%s), waiting",
                self.name,
                self._active,
                self.max_concurrent,
            )
        async with self._semaphore:
            self._active += 1
            try:
                yield
            finally:
                self._active -= 1


__all__ = ["InferenceLimiter"]
