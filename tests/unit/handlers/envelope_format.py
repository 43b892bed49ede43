"""Unit tests for success envelopes."""

from __future__ import annotations

import re

from mmclassify.handlers.envelope import TEXT_CLASSIFICATION_BATCH, IMAGE_CLASSIFICATION, build_envelope, utc_timestamp


def test_batch_envelope_field_order() -> None:
    body = build_envelope(TEXT_CLASSIFICATION_BATCH, elapsed_ms=12, inputs=["a"], results=[{"label": "X"}])

    assert list(body) == [
        "success",
        "type",
        "count",
        "inputs",
        "results",
        "processingTimeMs",
        "processingTime",
        "timestamp",
    ]
    assert body["count"] == 1
    assert body["processingTime"] == "12ms"


def test_single_envelope_keeps_falsy_result() -> None:
    body = build_envelope(IMAGE_CLASSIFICATION, elapsed_ms=0, result=[])

    assert body["result"] == []
    assert "count" not in body


def test_timestamp_is_utc_millis() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())
