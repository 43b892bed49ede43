"""Unit tests for API key authentication."""

from __future__ import annotations

import asyncio

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from mmclassify.handlers.auth import (
    INVALID_KEY_DETAIL,
    MISSING_KEY_DETAIL,
    _select_api_key,
    key_fingerprint,
    require_api_key,
    validate_api_key,
)


def _request() -> Request:
    return Request({"type": "http", "method": "POST", "path": "/classify/text", "headers": [], "query_string": b""})


def test_validate_api_key_matches_configured_key() -> None:
    assert validate_api_key("test-key") is True
    assert validate_api_key("wrong") is False
    assert validate_api_key("abc", expected_key="abc") is True


def test_select_api_key_prefers_first_non_empty() -> None:
    assert _select_api_key(None, "", "query-key") == "query-key"
    assert _select_api_key("header-key", "query-key") == "header-key"
    assert _select_api_key(None, None) is None


def test_require_api_key_sets_client_fingerprint() -> None:
    request = _request()
    key = asyncio.run(require_api_key(request, api_key_query=None, api_key_header="test-key"))

    assert key == "test-key"
    assert request.state.client_id == key_fingerprint("test-key")
    assert len(request.state.client_id) == 12


def test_require_api_key_missing() -> None:
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(require_api_key(_request(), api_key_query=None, api_key_header=None))
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == MISSING_KEY_DETAIL


def test_require_api_key_invalid() -> None:
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(require_api_key(_request(), api_key_query="nope", api_key_header=None))
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == INVALID_KEY_DETAIL
