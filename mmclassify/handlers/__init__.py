"""HTTP request handling: auth, validation, uploads, dispatch and errors."""

from .limits import InferenceLimiter
from .auth import require_api_key
from .errors import build_error_payload, register_exception_handlers
from .artifacts import ArtifactScope, ArtifactManager
from .dispatch import handle_text, handle_image, handle_text_batch, handle_image_batch
from .validation import read_json_object

__all__ = [
    "ArtifactManager",
    "ArtifactScope",
    "InferenceLimiter",
    "build_error_payload",
    "handle_image",
    "handle_image_batch",
    "handle_text",
    "handle_text_batch",
    "read_json_object",
    "register_exception_handlers",
    "require_api_key",
]
