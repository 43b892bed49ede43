"""Sentry error reporting for model loading, inference and cleanup failures.

Reports are rate-limited per (error class, modality) so a broken model that
fails every request produces one event per window instead of one per call.
"""

from __future__ import annotations

import time
import logging
import contextlib
from typing import Any

from ..logging.context import current_client_id, current_request_id
from ..config.models import TEXT_MODEL, IMAGE_MODEL
from ..config.telemetry import (
    SENTRY_DSN,
    SENTRY_RELEASE,
    SENTRY_ENVIRONMENT,
    SENTRY_SAMPLE_RATE,
    SENTRY_RATE_LIMIT_S,
    SENTRY_TAG_MODALITY,
    SENTRY_TAG_CLIENT_ID,
    SENTRY_TAG_REQUEST_ID,
)

logger = logging.getLogger(__name__)

_last_reported: dict[tuple[str, str], float] = {}
_initialized: bool = False


def init_sentry() -> None:
    """Initialize Sentry SDK and tag events with the served models. Idempotent."""
    global _initialized  # noqa: PLW0603
    if _initialized:
        return
    import sentry_sdk

    options: dict[str, Any] = {
        "dsn": SENTRY_DSN,
        "environment": SENTRY_ENVIRONMENT,
        "sample_rate": SENTRY_SAMPLE_RATE,
        "traces_sample_rate": 0.0,
        "attach_stacktrace": True,
    }
    if SENTRY_RELEASE:
        options["release"] = SENTRY_RELEASE
    sentry_sdk.init(**options)
    sentry_sdk.set_tag("model.text", TEXT_MODEL)
    sentry_sdk.set_tag("model.image", IMAGE_MODEL)

    _initialized = True
    logger.info("Sentry initialized: environment=%s", SENTRY_ENVIRONMENT)


def shutdown_sentry() -> None:
    """Flush queued events. Idempotent."""
    global _initialized  # noqa: PLW0603
    if not _initialized:
        return
    import sentry_sdk

    with contextlib.suppress(Exception):
        sentry_sdk.flush(timeout=2.0)
    _initialized = False


def _should_report(error: BaseException, modality: str) -> bool:
    key = (type(error).__qualname__, modality)
    now = time.monotonic()
    if now - _last_reported.get(key, float("-inf")) < SENTRY_RATE_LIMIT_S:
        return False
    _last_reported[key] = now
    return True


def capture_error(
    error: BaseException,
    *,
    modality: str | None = None,
    request_id: str | None = None,
    client_id: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Send ``error`` to Sentry with request and modality tags.

    No-op when Sentry is not initialized or the same error class was
    reported for the same modality within SENTRY_RATE_LIMIT_S.
    """
    if not _initialized or not _should_report(error, modality or "-"):
        return
    import sentry_sdk

    with sentry_sdk.new_scope() as scope:
        scope.set_tag(SENTRY_TAG_REQUEST_ID, request_id or current_request_id())
        scope.set_tag(SENTRY_TAG_CLIENT_ID, client_id or current_client_id())
        if modality:
            scope.set_tag(SENTRY_TAG_MODALITY, modality)
        for key, value in (extra or {}).items():
            scope.set_extra(key, value)
        sentry_sdk.capture_exception(error)


__all__ = ["init_sentry", "shutdown_sentry", "capture_error"]
