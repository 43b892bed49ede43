"""Unit tests for deferred deletion of uploaded files."""

from __future__ import annotations

import os
import asyncio

import pytest

from mmclassify.handlers import ArtifactManager
from mmclassify.state import TransientArtifact


def _artifact(path) -> TransientArtifact:
    path.write_bytes(b"data")
    return TransientArtifact(
        path=str(path),
        filename=path.name,
        original_name=path.name,
        fieldname="image",
        mimetype="image/png",
    )


def test_hold_releases_artifacts_on_error(tmp_path) -> None:
    manager = ArtifactManager(tmp_path, cleanup_delay_s=0)
    target = tmp_path / "a.png"

    async def _run():
        async with manager.hold() as scope:
            scope.track(_artifact(target))
            raise ValueError("request failed")

    with pytest.raises(ValueError):
        asyncio.run(_run())
    assert not target.exists()


def test_cleanup_waits_for_grace_period(tmp_path) -> None:
    manager = ArtifactManager(tmp_path, cleanup_delay_s=0.05)
    target = tmp_path / "b.png"

    async def _run():
        async with manager.hold() as scope:
            scope.track(_artifact(target))
        still_there = target.exists()
        pending = manager.pending_paths
        await asyncio.sleep(0.2)
        return still_there, pending, manager.pending_paths

    still_there, pending, pending_after = asyncio.run(_run())
    assert still_there is True
    assert pending == [str(target)]
    assert pending_after == []
    assert not target.exists()


def test_scheduling_twice_is_harmless(tmp_path) -> None:
    manager = ArtifactManager(tmp_path, cleanup_delay_s=0)
    target = tmp_path / "c.png"
    _artifact(target)

    manager.schedule_cleanup(str(target))
    manager.schedule_cleanup(str(target))

    assert not target.exists()
    assert manager.remove_now(str(target)) is False


def test_cleanup_failure_is_logged_not_raised(tmp_path, monkeypatch) -> None:
    manager = ArtifactManager(tmp_path, cleanup_delay_s=0)
    target = tmp_path / "d.png"
    _artifact(target)
    reported: list[BaseException] = []

    def _deny(path):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(os, "unlink", _deny)
    monkeypatch.setattr(
        "mmclassify.handlers.artifacts.capture_error",
        lambda exc, **kwargs: reported.append(exc),
    )

    manager.schedule_cleanup(str(target))

    assert target.exists()
    assert len(reported) == 1


def test_shutdown_flushes_pending_and_purges_directory(tmp_path) -> None:
    upload_dir = tmp_path / "uploads"
    manager = ArtifactManager(upload_dir, cleanup_delay_s=60, purge_on_shutdown=True)

    async def _run():
        manager.ensure_dir()
        target = upload_dir / "e.png"
        async with manager.hold() as scope:
            scope.track(_artifact(target))
        pending = len(manager.pending_paths)
        await manager.shutdown()
        return pending

    assert asyncio.run(_run()) == 1
    assert manager.pending_paths == []
    assert not upload_dir.exists()


def test_shutdown_keeps_directory_without_purge(tmp_path) -> None:
    manager = ArtifactManager(tmp_path / "keep", cleanup_delay_s=60, purge_on_shutdown=False)
    manager.ensure_dir()

    asyncio.run(manager.shutdown())

    assert (tmp_path / "keep").is_dir()
