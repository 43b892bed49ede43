"""Unit tests for the readiness gate."""

from __future__ import annotations

import asyncio

import pytest

from mmclassify.errors import REASON_LOADING, REASON_UNINITIALIZED, ModelNotReadyError
from mmclassify.models import ModelRegistry, check_ready, require_ready
from mmclassify.state import Readiness
from tests.support.stubs import TEXT_DESCRIPTOR, IMAGE_DESCRIPTOR, StubBackend


def test_uninitialized_registry_is_rejected() -> None:
    backend = StubBackend()
    registry = ModelRegistry(TEXT_DESCRIPTOR, backend)

    assert check_ready(registry) is Readiness.UNINITIALIZED
    with pytest.raises(ModelNotReadyError) as exc_info:
        require_ready(registry)

    assert exc_info.value.reason == REASON_UNINITIALIZED
    assert exc_info.value.message == "Text model not initialized."
    # The gate never starts acquisition.
    assert backend.acquire_calls == []
    assert registry.loading is False


def test_loading_registry_is_rejected_with_loading_reason() -> None:
    async def _run():
        registry = ModelRegistry(IMAGE_DESCRIPTOR, StubBackend(gate=asyncio.Event()))
        registry.start()
        await asyncio.sleep(0)
        state = check_ready(registry)
        try:
            require_ready(registry)
        except ModelNotReadyError as exc:
            error = exc
        await registry.shutdown()
        return state, error

    state, error = asyncio.run(_run())
    assert state is Readiness.LOADING
    assert error.reason == REASON_LOADING
    assert error.modality == "image"
    assert str(error) == "Image model is still loading. Please try again in a moment."


def test_ready_registry_returns_instance() -> None:
    registry = ModelRegistry(TEXT_DESCRIPTOR, StubBackend())
    instance = asyncio.run(registry.get_instance())

    assert check_ready(registry) is Readiness.READY
    assert require_ready(registry) is instance


def test_failed_registry_reports_uninitialized() -> None:
    registry = ModelRegistry(TEXT_DESCRIPTOR, StubBackend(failures=[RuntimeError("boom")]))
    asyncio.run(registry.initialize())

    assert check_ready(registry) is Readiness.UNINITIALIZED
