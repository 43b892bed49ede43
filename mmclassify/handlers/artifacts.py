"""Transient artifact manager for uploaded images.

Every file written for an image request is handed back to this manager when
the request ends, on every exit path. Deletion is deferred by a configurable
grace period so that a backend still holding a read handle is not disturbed.

Guarantees:
    - ``hold()`` schedules cleanup for every tracked artifact in a finally block
    - Deleting a missing file is a no-op, so repeated scheduling is harmless
    - Cleanup failures are logged and reported, never raised to the request
    - ``shutdown()`` runs pending deletions immediately

Example:
    async with manager.hold() as scope:
        artifact = await save_upload(upload, manager, scope, fieldname="image")
        result = await classify(artifact.path)
    # artifact.path is deleted cleanup_delay_s seconds later
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from mmclassify.errors import ArtifactCleanupError
from mmclassify.state import TransientArtifact
from mmclassify.telemetry import capture_error, get_metrics

logger = logging.getLogger(__name__)


class ArtifactScope:
    """Artifacts owned by one request."""

    __slots__ = ("artifacts",)

    def __init__(self) -> None:
        self.artifacts: list[TransientArtifact] = []

    def track(self, artifact: TransientArtifact) -> TransientArtifact:
        self.artifacts.append(artifact)
        return artifact

    @property
    def paths(self) -> list[str]:
        return [artifact.path for artifact in self.artifacts]


class ArtifactManager:
    """Owns the upload directory and the deferred deletion of its files.

    Attributes:
        upload_dir: Directory where incoming files are stored.
        cleanup_delay_s: Grace period between release and deletion.
        purge_on_shutdown: Remove the whole upload directory on shutdown.
    """

    def __init__(
        self,
        upload_dir: str | os.PathLike[str],
        *,
        cleanup_delay_s: float,
        purge_on_shutdown: bool = True,
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.cleanup_delay_s = max(0.0, float(cleanup_delay_s))
        self.purge_on_shutdown = purge_on_shutdown
        self._pending: dict[asyncio.Task[None], str] = {}

    # ============================================================================
    # Storage
    # ============================================================================

    def ensure_dir(self) -> Path:
        """Create the upload directory on demand."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    @property
    def pending_paths(self) -> list[str]:
        return list(self._pending.values())

    # ============================================================================
    # Scoped ownership
    # ============================================================================

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[ArtifactScope]:
        """Track artifacts for one request and release them on exit."""
        scope = ArtifactScope()
        try:
            yield scope
        finally:
            for path in scope.paths:
                self.schedule_cleanup(path)

    # ============================================================================
    # Deletion
    # ============================================================================

    def schedule_cleanup(self, path: str) -> None:
        """Delete ``path`` after the grace period; never raises."""
        if self.cleanup_delay_s <= 0:
            self._remove_logged(path)
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Called outside the event loop: nothing can wait, delete now.
            self._remove_logged(path)
            return
        task = loop.create_task(self._remove_later(path))
        self._pending[task] = path
        task.add_done_callback(self._forget)

    def remove_now(self, path: str) -> bool:
        """Delete ``path`` immediately.

        Returns:
            True if a file was removed, False if it was already gone.

        Raises:
            ArtifactCleanupError: If the file exists but cannot be removed.
        """
        try:
            os.unlink(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise ArtifactCleanupError(path, str(exc)) from exc
        return True

    async def _remove_later(self, path: str) -> None:
        await asyncio.sleep(self.cleanup_delay_s)
        self._remove_logged(path)

    def _remove_logged(self, path: str) -> None:
        try:
            removed = self.remove_now(path)
        except ArtifactCleanupError as exc:
            logger.error("artifacts: cleanup failed for %s: %s", path, exc.detail)
            capture_error(exc, extra={"path": path})
            return
        if removed:
            get_metrics().artifacts_cleaned_total.add(1)
            logger.debug("artifacts: removed %s", path)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._pending.pop(task, None)

    async def shutdown(self) -> None:
        """Run pending deletions now and optionally purge the upload directory."""
        pending = list(self._pending.items())
        for task, _ in pending:
            task.cancel()
        for task, path in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await task
            self._remove_logged(path)
        self._pending.clear()

        if self.purge_on_shutdown and self.upload_dir.exists():
            logger.info("artifacts: removing upload directory %s", self.upload_dir)
            shutil.rmtree(self.upload_dir, ignore_errors=True)


__all__ = ["ArtifactScope", "ArtifactManager"]
