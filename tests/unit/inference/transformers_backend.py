"""Unit tests for the transformers pipeline backend (pipeline construction stubbed)."""

from __future__ import annotations

import asyncio

from mmclassify.inference.backend import PipelineRunner, TransformersBackend
from tests.support.stubs import POSITIVE


class _FakePipeline:
    def __init__(self) -> None:
        self.calls: list[tuple[object, dict]] = []

    def __call__(self, inputs, **options):
        self.calls.append((inputs, options))
        return POSITIVE


def _backend_with(monkeypatch, pipe: _FakePipeline) -> tuple[TransformersBackend, list[tuple[str, str]]]:
    backend = TransformersBackend(device="cpu")
    built: list[tuple[str, str]] = []

    def _build(task, model_id):
        built.append((task, model_id))
        return pipe

    monkeypatch.setattr(backend, "_build_pipeline", _build)
    return backend, built


def test_acquire_reports_initiate_then_done(monkeypatch) -> None:
    backend, built = _backend_with(monkeypatch, _FakePipeline())
    events: list[dict] = []

    runner = asyncio.run(backend.acquire("text-classification", "acme/sentiment", events.append))

    assert isinstance(runner, PipelineRunner)
    assert built == [("text-classification", "acme/sentiment")]
    assert [event["status"] for event in events] == ["initiate", "done"]
    assert events[-1] == {"status": "done", "name": "acme/sentiment", "progress": 100.0}


def test_failing_progress_observer_does_not_break_loading(monkeypatch) -> None:
    backend, _ = _backend_with(monkeypatch, _FakePipeline())

    def _broken(event):
        raise ValueError("observer down")

    runner = asyncio.run(backend.acquire("image-classification", "acme/vit", _broken))

    assert runner.model_id == "acme/vit"


def test_runner_forwards_inputs_and_options(monkeypatch) -> None:
    pipe = _FakePipeline()
    backend, _ = _backend_with(monkeypatch, pipe)

    async def _run():
        runner = await backend.acquire("text-classification", "acme/sentiment")
        return await runner(["good", "bad"], top_k=1)

    result = asyncio.run(_run())

    assert result == POSITIVE
    assert pipe.calls == [(["good", "bad"], {"top_k": 1})]
