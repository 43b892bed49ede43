"""Unit tests for image classification dispatch and upload lifecycle."""

from __future__ import annotations

import io
import os
import asyncio

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from mmclassify.errors import InferenceError, InvalidInputError, ModelNotReadyError
from mmclassify.handlers import dispatch, handle_image, handle_image_batch
from tests.support.stubs import POSITIVE, StubBackend, StubClassifier, make_deps, make_ready_deps


def _upload(name: str, data: bytes = b"\x89PNG fake", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        size=len(data),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class _FailOnCall(StubClassifier):
    def __init__(self, failing_call: int) -> None:
        super().__init__()
        self.failing_call = failing_call

    async def __call__(self, inputs, **options):
        self.calls.append(inputs)
        if len(self.calls) == self.failing_call:
            raise RuntimeError("corrupt image")
        return self.result


def test_single_image_echoes_file_fields(tmp_path) -> None:
    classifier = StubClassifier()
    deps = make_ready_deps(StubBackend(classifiers={"image-classification": classifier}), tmp_path)

    body = asyncio.run(handle_image(deps, _upload("cat.PNG", b"12345")))

    assert body["type"] == "image-classification"
    assert body["originalName"] == "cat.PNG"
    assert body["filename"].startswith("image-")
    assert body["filename"].endswith(".png")
    assert body["size"] == 5
    assert body["result"] == POSITIVE
    # Delay 0: the stored file is gone once the request returns.
    assert classifier.calls == [str(tmp_path / body["filename"])]
    assert not os.path.exists(classifier.calls[0])


def test_batch_classifies_in_submission_order(tmp_path) -> None:
    classifier = StubClassifier()
    deps = make_ready_deps(StubBackend(classifiers={"image-classification": classifier}), tmp_path)
    uploads = [_upload(f"{name}.jpg", content_type="image/jpeg") for name in ("a", "b", "c")]

    body = asyncio.run(handle_image_batch(deps, uploads))

    assert body["type"] == "image-classification-batch"
    assert body["count"] == 3
    assert [item["originalName"] for item in body["results"]] == ["a.jpg", "b.jpg", "c.jpg"]
    assert all(item["result"] == POSITIVE for item in body["results"])
    assert [os.path.basename(path) for path in classifier.calls] == [
        item["filename"] for item in body["results"]
    ]


def test_batch_failure_on_second_file_cleans_all_files(tmp_path) -> None:
    classifier = _FailOnCall(failing_call=2)
    deps = make_ready_deps(
        StubBackend(classifiers={"image-classification": classifier}),
        tmp_path,
        cleanup_delay_s=30.0,
    )
    uploads = [_upload(f"{name}.png") for name in ("one", "two", "three")]

    async def _run():
        with pytest.raises(InferenceError) as exc_info:
            await handle_image_batch(deps, uploads)
        pending = sorted(deps.artifacts.pending_paths)
        existed = [os.path.exists(path) for path in pending]
        await deps.artifacts.shutdown()
        return exc_info.value, pending, existed

    error, pending, existed = asyncio.run(_run())

    assert error.operation == "Image batch classification"
    assert len(pending) == 3
    assert all(existed)
    assert not any(os.path.exists(path) for path in pending)


def test_too_many_files_rejected_before_storage(tmp_path) -> None:
    classifier = StubClassifier()
    deps = make_ready_deps(StubBackend(classifiers={"image-classification": classifier}), tmp_path / "uploads")
    uploads = [_upload(f"{i}.png") for i in range(11)]

    with pytest.raises(InvalidInputError) as exc_info:
        asyncio.run(handle_image_batch(deps, uploads))

    assert exc_info.value.message == "Too many files. Maximum 10 files per batch."
    assert classifier.calls == []
    assert not (tmp_path / "uploads").exists()


def test_missing_image_rejected(tmp_path) -> None:
    deps = make_ready_deps(StubBackend(), tmp_path)

    with pytest.raises(InvalidInputError) as exc_info:
        asyncio.run(handle_image(deps, None))

    assert exc_info.value.error_code == "missing_image"


def test_unready_image_model_does_not_touch_disk(tmp_path) -> None:
    upload_dir = tmp_path / "uploads"
    deps = make_deps(StubBackend(), upload_dir)

    with pytest.raises(ModelNotReadyError):
        asyncio.run(handle_image(deps, _upload("cat.png")))

    assert not upload_dir.exists()


def test_non_image_upload_rejected(tmp_path) -> None:
    deps = make_ready_deps(StubBackend(), tmp_path)

    with pytest.raises(InvalidInputError) as exc_info:
        asyncio.run(handle_image(deps, _upload("notes.txt", content_type="text/plain")))

    assert exc_info.value.message == "Only image files are allowed!"


def test_image_requests_check_readiness_once(tmp_path, monkeypatch) -> None:
    checked = []
    real_require_ready = dispatch.require_ready

    def _counting_require_ready(registry):
        checked.append(registry.modality.value)
        return real_require_ready(registry)

    monkeypatch.setattr(dispatch, "require_ready", _counting_require_ready)
    deps = make_ready_deps(StubBackend(), tmp_path)

    asyncio.run(handle_image(deps, _upload("cat.png")))
    assert checked == ["image"]

    asyncio.run(handle_image_batch(deps, [_upload("a.png"), _upload("b.png")]))
    assert checked == ["image", "image"]
