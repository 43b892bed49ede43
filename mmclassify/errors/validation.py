"""Input validation exceptions with structured error codes.

This module provides validation exceptions that carry both a human-readable
message and a machine-parseable error code for API responses.
"""

from __future__ import annotations

from typing import Any


class InvalidInputError(Exception):
    """Structured validation failure with error code metadata.

    Raised when a request body or upload is malformed, missing or over a
    limit. Always caller-fixable and never retried by the server.

    Attributes:
        error_code: Machine-parseable error identifier.
        message: Human-readable error description.
        example: Optional example of a well-formed request body.
        note: Optional hint about how to send the request.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        *,
        example: Any = None,
        note: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.example = example
        self.note = note


__all__ = ["InvalidInputError"]
