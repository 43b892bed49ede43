"""Unit tests for contextual logging fields."""

from __future__ import annotations

import logging

from mmclassify.logging import log_context, current_client_id, current_request_id, install_log_context


def test_log_context_sets_and_restores() -> None:
    assert current_request_id() == "-"
    with log_context(request_id="req-1", client_id="abc"):
        assert current_request_id() == "req-1"
        assert current_client_id() == "abc"
        with log_context(request_id="req-2"):
            assert current_request_id() == "req-2"
            assert current_client_id() == "abc"
        assert current_request_id() == "req-1"
    assert current_request_id() == "-"
    assert current_client_id() == "-"


def test_records_carry_context_fields() -> None:
    install_log_context()
    with log_context(request_id="req-9", client_id="c0ffee"):
        record = logging.getLogRecordFactory()("mmclassify", logging.INFO, __file__, 1, "msg", (), None)
    assert record.request_id == "req-9"
    assert record.client_id == "c0ffee"
