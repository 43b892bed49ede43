"""Exception-to-response mapping for the HTTP surface.

Status codes:
    - InvalidInputError   -> 400
    - HTTPException       -> its own status (401 from auth, 404 unknown route)
    - ModelNotReadyError  -> 503 with Retry-After
    - InferenceError      -> 500 with the backend's message as diagnostic
    - anything else       -> 500
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mmclassify.config.runtime import NOT_READY_RETRY_AFTER_S
from mmclassify.errors import REASON_LOADING, InferenceError, InvalidInputError, ModelNotReadyError
from mmclassify.logging import current_client_id, current_request_id
from mmclassify.telemetry import capture_error, get_metrics

logger = logging.getLogger(__name__)


def build_error_payload(error: str, error_code: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build the ``{"success": false, ...}`` body shared by error responses."""
    payload: dict[str, Any] = {"success": False, "error": error}
    if error_code:
        payload["error_code"] = error_code
    payload.update({key: value for key, value in extra.items() if value is not None})
    return payload


def _count_error(error_type: str) -> None:
    get_metrics().errors_total.add(1, {"error_type": error_type})


async def _invalid_input(request: Request, exc: InvalidInputError) -> ORJSONResponse:
    _count_error("invalid_input")
    logger.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.message, exc.error_code)
    body = build_error_payload(exc.message, exc.error_code, example=exc.example, note=exc.note)
    return ORJSONResponse(body, status_code=400)


async def _request_validation(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    _count_error("invalid_input")
    body = build_error_payload("Invalid request", "invalid_request", details=jsonable_encoder(exc.errors()))
    return ORJSONResponse(body, status_code=400)


async def _model_not_ready(request: Request, exc: ModelNotReadyError) -> ORJSONResponse:
    _count_error("not_ready")
    code = "model_loading" if exc.reason == REASON_LOADING else "model_not_initialized"
    body = build_error_payload(exc.message, code)
    return ORJSONResponse(
        body,
        status_code=503,
        headers={"Retry-After": str(NOT_READY_RETRY_AFTER_S)},
    )


async def _inference_failed(request: Request, exc: InferenceError) -> ORJSONResponse:
    # Logged and reported where the backend failure was caught.
    body = build_error_payload(f"{exc.operation} failed", "inference_failed", message=exc.detail)
    return ORJSONResponse(body, status_code=500)


async def _http_error(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    if exc.status_code == 404:
        body: dict[str, Any] = {
            "error": "Route not found",
            "method": request.method,
            "path": request.url.path,
        }
    else:
        body = build_error_payload(str(exc.detail))
    return ORJSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def _unhandled(request: Request, exc: Exception) -> ORJSONResponse:
    _count_error("unknown")
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    capture_error(exc, request_id=current_request_id(), client_id=current_client_id())
    body = {"error": "Internal server error", "message": str(exc)}
    return ORJSONResponse(body, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every gateway exception handler to ``app``."""
    app.add_exception_handler(InvalidInputError, _invalid_input)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(ModelNotReadyError, _model_not_ready)
    app.add_exception_handler(InferenceError, _inference_failed)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled)


__all__ = ["build_error_payload", "register_exception_handlers"]
