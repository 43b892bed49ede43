"""Model-not-ready lifecycle exception."""

from __future__ import annotations

REASON_LOADING = "loading"
REASON_UNINITIALIZED = "uninitialized"


class ModelNotReadyError(Exception):
    """Raised when a modality's model cannot serve requests yet.

    The reason distinguishes a model that is still being acquired from one
    that was never loaded (or whose acquisition failed). Both are retryable
    by the caller.
    """

    def __init__(self, modality: str, reason: str) -> None:
        self.modality = modality
        self.reason = reason
        name = modality.capitalize()
        if reason == REASON_LOADING:
            message = f"{name} model is still loading. Please try again in a moment."
        else:
            message = f"{name} model not initialized."
        super().__init__(message)
        self.message = message


__all__ = ["ModelNotReadyError", "REASON_LOADING", "REASON_UNINITIALIZED"]
