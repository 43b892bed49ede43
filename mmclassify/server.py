"""Main FastAPI server for the multi-modal classification gateway.

This module builds the HTTP application that fronts two pretrained
classification models, one for text and one for images. It provides:

- Informational endpoints (/, /health, /models/info, /examples)
- Authenticated classification endpoints under /classify
- Background model loading on startup with a readiness gate (503 until ready)
- Deferred deletion of uploaded images after every image request
- Graceful shutdown that flushes pending deletions

Server Lifecycle:
    1. On startup: configure logging and telemetry, wire runtime deps and
       schedule model acquisition (image first, then text)
    2. Serve requests; classification answers 503 while a model is loading
    3. On shutdown: cancel in-flight loading, flush uploads, flush telemetry

Example:
    Run directly with uvicorn:
        $ uvicorn mmclassify.server:app --host 0.0.0.0 --port 8000

    Or programmatically:
        from mmclassify.server import create_app
        import uvicorn
        uvicorn.run(create_app(), host="0.0.0.0", port=8000)
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from typing import Any

from fastapi import File, Depends, FastAPI, Request, APIRouter, UploadFile
from fastapi.responses import ORJSONResponse

from .config import SERVICE_NAME, SERVICE_VERSION, WAIT_FOR_MODELS_ON_STARTUP
from .logging import log_context, configure_logging
from .runtime import RuntimeDeps, load_models, build_runtime_deps, schedule_model_loading
from .telemetry import init_telemetry, shutdown_telemetry
from .handlers import (
    handle_text,
    handle_image,
    require_api_key,
    read_json_object,
    handle_text_batch,
    handle_image_batch,
    register_exception_handlers,
)
from .handlers.catalog import health_report, models_info, usage_examples, service_descriptor

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def get_runtime_deps(request: Request) -> RuntimeDeps:
    """FastAPI dependency returning the process-wide runtime services."""
    deps = request.app.state.runtime_deps
    if deps is None:
        raise RuntimeError("runtime dependencies are not initialized")
    return deps


def _client_id(request: Request) -> str | None:
    return getattr(request.state, "client_id", None)


# ============================================================================
# Informational endpoints (no authentication)
# ============================================================================

info_router = APIRouter()


@info_router.get("/")
async def root() -> dict[str, Any]:
    """Service descriptor and endpoint list."""
    return service_descriptor()


@info_router.get("/health")
async def health(deps: RuntimeDeps = Depends(get_runtime_deps)) -> dict[str, Any]:
    """Liveness plus per-modality model state."""
    return health_report(deps)


@info_router.get("/models/info")
async def model_info(deps: RuntimeDeps = Depends(get_runtime_deps)) -> dict[str, Any]:
    return models_info(deps)


@info_router.get("/examples")
async def examples() -> dict[str, Any]:
    return usage_examples()


@info_router.get("/favicon.ico", status_code=204)
async def favicon():
    """Suppress favicon requests from browsers/probes."""
    return None


# ============================================================================
# Classification endpoints
# ============================================================================

classify_router = APIRouter(prefix="/classify", dependencies=[Depends(require_api_key)])


@classify_router.post("/text")
async def classify_text(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> dict[str, Any]:
    payload = await read_json_object(request)
    with log_context(client_id=_client_id(request)):
        return await handle_text(deps, payload)


@classify_router.post("/text/batch")
async def classify_text_batch(request: Request, deps: RuntimeDeps = Depends(get_runtime_deps)) -> dict[str, Any]:
    payload = await read_json_object(request)
    with log_context(client_id=_client_id(request)):
        return await handle_text_batch(deps, payload)


@classify_router.post("/image")
async def classify_image(
    request: Request,
    image: UploadFile | None = File(None),
    deps: RuntimeDeps = Depends(get_runtime_deps),
) -> dict[str, Any]:
    with log_context(client_id=_client_id(request)):
        return await handle_image(deps, image)


@classify_router.post("/image/batch")
async def classify_image_batch(
    request: Request,
    images: list[UploadFile] | None = File(None),
    deps: RuntimeDeps = Depends(get_runtime_deps),
) -> dict[str, Any]:
    with log_context(client_id=_client_id(request)):
        return await handle_image_batch(deps, images)


# ============================================================================
# Application factory
# ============================================================================

def create_app(
    runtime_deps: RuntimeDeps | None = None,
    *,
    load_models_on_startup: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        runtime_deps: Prebuilt services; built from config at startup if None.
        load_models_on_startup: Schedule model acquisition in the startup hook.
    """
    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, default_response_class=ORJSONResponse)
    app.state.runtime_deps = runtime_deps
    app.state.loader_task = None

    register_exception_handlers(app)
    app.include_router(info_router)
    app.include_router(classify_router)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        with log_context(request_id=request_id):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.on_event("startup")
    async def start_services() -> None:
        """Wire runtime services and start model acquisition.

        By default models load in the background so /health answers at once
        and classification answers 503 until each model is ready. Set
        WAIT_FOR_MODELS_ON_STARTUP to hold startup until loading settles.
        """
        configure_logging()
        init_telemetry()
        deps = app.state.runtime_deps
        if deps is None:
            deps = app.state.runtime_deps = build_runtime_deps()
        if not load_models_on_startup:
            return
        if WAIT_FOR_MODELS_ON_STARTUP:
            await load_models(deps)
        else:
            app.state.loader_task = schedule_model_loading(deps)
        logger.info("startup: serving %s v%s", SERVICE_NAME, SERVICE_VERSION)

    @app.on_event("shutdown")
    async def stop_services() -> None:
        """Stop loading, flush uploads and telemetry."""
        task = app.state.loader_task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        deps = app.state.runtime_deps
        if deps is not None:
            await deps.shutdown()
        shutdown_telemetry()
        logger.info("shutdown: complete")

    return app


app = create_app()


__all__ = ["app", "create_app", "get_runtime_deps"]
