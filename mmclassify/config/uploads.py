"""Transient upload storage configuration."""

import os

from ..helpers.env import env_flag, env_float


UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")

# Grace period between the end of a request and deletion of its uploads
UPLOAD_CLEANUP_DELAY_S = env_float("UPLOAD_CLEANUP_DELAY_S", 5.0)

# Only files whose content type starts with this prefix are accepted
UPLOAD_MIME_PREFIX = os.getenv("UPLOAD_MIME_PREFIX", "image/")

# Remove the upload directory when the server shuts down
UPLOAD_PURGE_ON_SHUTDOWN = env_flag("UPLOAD_PURGE_ON_SHUTDOWN", True)

UPLOAD_CHUNK_BYTES = 64 * 1024

# Multipart field names
IMAGE_FIELD = "image"
IMAGES_FIELD = "images"


__all__ = [
    "UPLOAD_DIR",
    "UPLOAD_CLEANUP_DELAY_S",
    "UPLOAD_MIME_PREFIX",
    "UPLOAD_PURGE_ON_SHUTDOWN",
    "UPLOAD_CHUNK_BYTES",
    "IMAGE_FIELD",
    "IMAGES_FIELD",
]
