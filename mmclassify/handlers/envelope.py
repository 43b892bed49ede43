"""Response envelope builders for classification endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

TEXT_CLASSIFICATION = "text-classification"
TEXT_CLASSIFICATION_BATCH = "text-classification-batch"
IMAGE_CLASSIFICATION = "image-classification"
IMAGE_CLASSIFICATION_BATCH = "image-classification-batch"

_MISSING = object()


def utc_timestamp() -> str:
    """ISO8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_envelope(
    request_type: str,
    *,
    elapsed_ms: int,
    result: Any = _MISSING,
    results: list[Any] | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Assemble a success envelope.

    Args:
        request_type: One of the ``*_CLASSIFICATION*`` constants.
        elapsed_ms: Wall-clock duration of the inference call(s).
        result: Single result (single requests).
        results: Ordered results (batch requests); also sets ``count``.
        **fields: Extra echo fields such as ``input`` or ``filename``.
    """
    envelope: dict[str, Any] = {"success": True, "type": request_type}
    if results is not None:
        envelope["count"] = len(results)
    envelope.update(fields)
    if results is not None:
        envelope["results"] = results
    if result is not _MISSING:
        envelope["result"] = result
    envelope["processingTimeMs"] = elapsed_ms
    envelope["processingTime"] = f"{elapsed_ms}ms"
    envelope["timestamp"] = utc_timestamp()
    return envelope


__all__ = [
    "TEXT_CLASSIFICATION",
    "TEXT_CLASSIFICATION_BATCH",
    "IMAGE_CLASSIFICATION",
    "IMAGE_CLASSIFICATION_BATCH",
    "build_envelope",
    "utc_timestamp",
]
