"""HTTP-level tests for the classification gateway."""

from __future__ import annotations

import os
import asyncio

import pytest
from fastapi.testclient import TestClient

from mmclassify.server import create_app
from tests.support.stubs import POSITIVE, StubBackend, StubClassifier, make_deps, make_ready_deps

AUTH = {"X-API-Key": "test-key"}


class _FailOnCall(StubClassifier):
    def __init__(self, failing_call: int) -> None:
        super().__init__()
        self.failing_call = failing_call

    async def __call__(self, inputs, **options):
        self.calls.append(inputs)
        if len(self.calls) == self.failing_call:
            raise RuntimeError("corrupt image")
        return self.result


@pytest.fixture
def ready_client(tmp_path):
    deps = make_ready_deps(StubBackend(), tmp_path / "uploads")
    with TestClient(create_app(deps, load_models_on_startup=False)) as client:
        yield client


def test_text_classification_round_trip(ready_client) -> None:
    response = ready_client.post("/classify/text", json={"text": "Great!"}, headers=AUTH)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["type"] == "text-classification"
    assert body["result"] == POSITIVE
    assert response.headers["X-Request-ID"]


def test_request_id_is_propagated(ready_client) -> None:
    response = ready_client.get("/", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_text_batch_over_limit_is_400(tmp_path) -> None:
    classifier = StubClassifier()
    deps = make_ready_deps(StubBackend(classifiers={"text-classification": classifier}), tmp_path / "uploads")
    texts = ["Great", "Bad", "Meh"] + [f"t{i}" for i in range(98)]

    with TestClient(create_app(deps, load_models_on_startup=False)) as client:
        response = client.post("/classify/text/batch", json={"texts": texts}, headers=AUTH)

    assert response.status_code == 400
    body = response.json()
    assert body == {
        "success": False,
        "error": "Maximum 100 texts allowed per batch",
        "error_code": "too_many_texts",
    }
    assert classifier.calls == []


def test_invalid_json_is_400(ready_client) -> None:
    response = ready_client.post(
        "/classify/text",
        content=b"{not json",
        headers={**AUTH, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "invalid_json"


def test_missing_text_includes_example(ready_client) -> None:
    response = ready_client.post("/classify/text", json={}, headers=AUTH)

    assert response.status_code == 400
    assert response.json()["example"] == {"text": "This is a great product!"}


def test_image_batch_failure_reclaims_every_file(tmp_path) -> None:
    classifier = _FailOnCall(failing_call=2)
    upload_dir = tmp_path / "uploads"
    deps = make_ready_deps(
        StubBackend(classifiers={"image-classification": classifier}),
        upload_dir,
        cleanup_delay_s=30.0,
    )
    files = [("images", (f"{name}.png", b"\x89PNG data", "image/png")) for name in ("one", "two", "three")]

    with TestClient(create_app(deps, load_models_on_startup=False)) as client:
        response = client.post("/classify/image/batch", files=files, headers=AUTH)
        pending = list(deps.artifacts.pending_paths)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Image batch classification failed"
    assert body["error_code"] == "inference_failed"
    assert body["message"] == "corrupt image"
    assert len(pending) == 3
    # Shutdown flushed pending deletions and removed the directory.
    assert not any(os.path.exists(path) for path in pending)
    assert not upload_dir.exists()


def test_single_image_upload(ready_client) -> None:
    response = ready_client.post(
        "/classify/image",
        files={"image": ("cat.jpg", b"jpegbytes", "image/jpeg")},
        headers=AUTH,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "image-classification"
    assert body["originalName"] == "cat.jpg"
    assert body["size"] == len(b"jpegbytes")


def test_non_image_upload_is_400(ready_client) -> None:
    response = ready_client.post(
        "/classify/image",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=AUTH,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Only image files are allowed!"


def test_missing_image_is_400(ready_client) -> None:
    response = ready_client.post("/classify/image", headers=AUTH)

    assert response.status_code == 400
    assert response.json()["error"] == "No image file provided"


def test_health_reports_loading_before_models_finish(tmp_path) -> None:
    deps = make_deps(StubBackend(gate=asyncio.Event()), tmp_path / "uploads")

    with TestClient(create_app(deps)) as client:
        response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["models"] == {
        "text": {"loaded": False, "loading": True},
        "image": {"loaded": False, "loading": True},
    }


def test_classify_while_loading_is_503(tmp_path) -> None:
    deps = make_deps(StubBackend(gate=asyncio.Event()), tmp_path / "uploads")

    with TestClient(create_app(deps)) as client:
        response = client.post("/classify/text", json={"text": "hi"}, headers=AUTH)

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "5"
    body = response.json()
    assert body["error_code"] == "model_loading"
    assert body["error"] == "Text model is still loading. Please try again in a moment."


def test_classify_uninitialized_is_503(tmp_path) -> None:
    deps = make_deps(StubBackend(), tmp_path / "uploads")

    with TestClient(create_app(deps, load_models_on_startup=False)) as client:
        response = client.post("/classify/image", files={"image": ("a.png", b"x", "image/png")}, headers=AUTH)

    assert response.status_code == 503
    assert response.json()["error_code"] == "model_not_initialized"
    assert not (tmp_path / "uploads").exists()


def test_startup_loads_models_in_background(tmp_path) -> None:
    backend = StubBackend()
    deps = make_deps(backend, tmp_path / "uploads")

    with TestClient(create_app(deps)) as client:
        # The stub acquires without blocking; poll until both report ready.
        for _ in range(100):
            if all(state["loaded"] for state in client.get("/health").json()["models"].values()):
                break
        response = client.post("/classify/text", json={"text": "Great!"}, headers=AUTH)

    assert response.status_code == 200
    assert [model_id for _, model_id in backend.acquire_calls] == ["stub/image-model", "stub/text-model"]


def test_classify_requires_api_key(ready_client) -> None:
    missing = ready_client.post("/classify/text", json={"text": "hi"})
    invalid = ready_client.post("/classify/text?api_key=wrong", json={"text": "hi"})
    query = ready_client.post("/classify/text?api_key=test-key", json={"text": "hi"})

    assert missing.status_code == 401
    assert missing.json()["error"].startswith("API key required")
    assert invalid.status_code == 401
    assert invalid.json()["error"] == "Invalid API key."
    assert query.status_code == 200


def test_unknown_route_is_json_404(ready_client) -> None:
    response = ready_client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found", "method": "GET", "path": "/nope"}


def test_informational_endpoints(ready_client) -> None:
    root = ready_client.get("/").json()
    info = ready_client.get("/models/info").json()
    examples = ready_client.get("/examples").json()

    assert root["capabilities"] == ["text-classification", "image-classification"]
    assert root["endpoints"]["textBatch"] == "POST /classify/text/batch"
    assert info["textClassification"]["model"] == "stub/text-model"
    assert info["textClassification"]["loaded"] is True
    assert info["textClassification"]["labels"] == ["POSITIVE", "NEGATIVE"]
    assert "webp" in info["imageClassification"]["supportedFormats"]
    assert examples["imageClassification"]["batch"]["field"] == "images"


def test_unhandled_error_is_json_500() -> None:
    client = TestClient(create_app(load_models_on_startup=False), raise_server_exceptions=False)

    # Without startup no runtime deps exist.
    response = client.get("/health")

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
