"""Transient upload state."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass(slots=True)
class TransientArtifact:
    """An uploaded file owned by one request until its deferred deletion."""

    path: str
    filename: str
    original_name: str
    fieldname: str
    mimetype: str
    size: int = 0
    created_at: float = field(default_factory=time.time)

    def describe(self) -> dict[str, object]:
        """Return the per-file fields echoed in image responses."""
        return {
            "filename": self.filename,
            "originalName": self.original_name,
            "size": self.size,
        }


__all__ = ["TransientArtifact"]
