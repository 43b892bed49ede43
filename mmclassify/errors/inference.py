"""Inference and artifact lifecycle exceptions."""

from __future__ import annotations


class InferenceError(Exception):
    """Raised when the inference backend fails while classifying.

    The original backend exception is chained as ``__cause__``; its message
    is kept on ``detail`` for the diagnostic field of the 500 response.

    Attributes:
        operation: Human-readable name of the failed operation.
        detail: Message of the underlying backend exception.
    """

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class ArtifactCleanupError(Exception):
    """Raised internally when a transient upload cannot be deleted.

    Never surfaced to clients; the response has already been sent by the
    time deferred cleanup runs.
    """

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"failed to remove {path}: {detail}")
        self.path = path
        self.detail = detail


__all__ = ["InferenceError", "ArtifactCleanupError"]
