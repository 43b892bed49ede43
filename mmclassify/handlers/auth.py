"""API key authentication for the classification endpoints."""

from __future__ import annotations

import hashlib
import hmac
import logging

from fastapi import HTTPException, Request, Security
from fastapi.security.api_key import APIKeyHeader, APIKeyQuery

from ..config import API_KEY

logger = logging.getLogger(__name__)

# API Key can be provided via query parameter or header
api_key_query = APIKeyQuery(name="api_key", auto_error=False)
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

MISSING_KEY_DETAIL = "API key required. Provide via 'X-API-Key' header or 'api_key' query parameter."
INVALID_KEY_DETAIL = "Invalid API key."


def validate_api_key(provided_key: str, expected_key: str | None = None) -> bool:
    """Validate provided API key against configured key.

    Args:
        provided_key: The API key to validate
        expected_key: Override for the configured key (tests)

    Returns:
        True if valid, False otherwise
    """
    expected = API_KEY if expected_key is None else expected_key
    return hmac.compare_digest(provided_key.encode(), expected.encode())


def key_fingerprint(key: str) -> str:
    """Short stable identifier for a key, safe to log."""
    return hashlib.sha256(key.encode()).hexdigest()[:12]


def _select_api_key(*candidates: str | None) -> str | None:
    """Return the first non-empty API key candidate from the provided values."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def _validate_candidate(provided_key: str | None, *, context: str) -> tuple[bool, str | None, str | None]:
    """Validate a candidate API key and return (is_valid, key, error_code)."""
    if not provided_key:
        logger.warning("%s missing API key", context)
        return False, None, "missing"
    if not validate_api_key(provided_key):
        logger.warning("%s invalid API key", context)
        return False, None, "invalid"
    return True, provided_key, None


async def require_api_key(
    request: Request,
    api_key_query: str | None = Security(api_key_query),
    api_key_header: str | None = Security(api_key_header),
) -> str:
    """FastAPI dependency to extract and validate API key from request.

    On success the key fingerprint is stored on ``request.state.client_id``
    for log correlation.
    """
    provided_key = _select_api_key(api_key_header, api_key_query)
    ok, valid_key, error = _validate_candidate(provided_key, context=f"{request.method} {request.url.path}")
    if ok and valid_key:
        request.state.client_id = key_fingerprint(valid_key)
        return valid_key

    if error == "missing":
        raise HTTPException(status_code=401, detail=MISSING_KEY_DETAIL)
    raise HTTPException(status_code=401, detail=INVALID_KEY_DETAIL)


__all__ = [
    "INVALID_KEY_DETAIL",
    "MISSING_KEY_DETAIL",
    "key_fingerprint",
    "require_api_key",
    "validate_api_key",
]
