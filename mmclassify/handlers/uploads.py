"""Upload ingestion: validation of multipart files and storage on disk.

Validation runs before the readiness gate and only inspects metadata the
multipart parser already has (count, content type, declared size). Writing
files into the upload directory happens after the gate, inside an
``ArtifactManager.hold()`` scope, so every written file is reclaimed.
"""

from __future__ import annotations

import asyncio
import logging
import os
import random
import time
from typing import BinaryIO

from fastapi import UploadFile

from mmclassify.config.limits import UPLOAD_MAX_BYTES
from mmclassify.config.uploads import UPLOAD_CHUNK_BYTES, UPLOAD_MIME_PREFIX
from mmclassify.errors import InvalidInputError
from mmclassify.state import TransientArtifact

from .artifacts import ArtifactScope, ArtifactManager

logger = logging.getLogger(__name__)

ONLY_IMAGES_MESSAGE = "Only image files are allowed!"


def _too_large(max_bytes: int) -> InvalidInputError:
    megabytes = max_bytes / (1024 * 1024)
    return InvalidInputError("file_too_large", f"File too large. Maximum size is {megabytes:g}MB.")


def validate_upload(
    upload: UploadFile,
    *,
    mime_prefix: str = UPLOAD_MIME_PREFIX,
    max_bytes: int = UPLOAD_MAX_BYTES,
) -> None:
    """Reject non-image uploads and uploads whose declared size is too big."""
    content_type = (upload.content_type or "").lower()
    if not content_type.startswith(mime_prefix):
        raise InvalidInputError("unsupported_media_type", ONLY_IMAGES_MESSAGE)
    size = getattr(upload, "size", None)
    if size is not None and size > max_bytes:
        raise _too_large(max_bytes)


def unique_filename(fieldname: str, original_name: str | None) -> str:
    """Build ``<field>-<epoch ms>-<random><ext>`` for collision-free storage."""
    _, ext = os.path.splitext(original_name or "")
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{fieldname}-{suffix}{ext.lower()}"


def _copy_limited(source: BinaryIO, dest_path: str, max_bytes: int) -> int:
    written = 0
    source.seek(0)
    with open(dest_path, "wb") as out:
        while True:
            chunk = source.read(UPLOAD_CHUNK_BYTES)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                raise _too_large(max_bytes)
            out.write(chunk)
    return written


async def save_upload(
    upload: UploadFile,
    manager: ArtifactManager,
    scope: ArtifactScope,
    *,
    fieldname: str,
    max_bytes: int = UPLOAD_MAX_BYTES,
) -> TransientArtifact:
    """Persist one upload into the manager's directory and track it in ``scope``.

    The artifact is tracked before any byte is written so that a partial
    file left by a failed copy is still reclaimed.

    Raises:
        InvalidInputError: If the stream turns out larger than ``max_bytes``.
    """
    directory = await asyncio.to_thread(manager.ensure_dir)
    filename = unique_filename(fieldname, upload.filename)
    artifact = scope.track(
        TransientArtifact(
            path=str(directory / filename),
            filename=filename,
            original_name=upload.filename or filename,
            fieldname=fieldname,
            mimetype=upload.content_type or "",
        )
    )
    artifact.size = await asyncio.to_thread(_copy_limited, upload.file, artifact.path, max_bytes)
    logger.debug("uploads: stored %s (%s bytes) as %s", artifact.original_name, artifact.size, artifact.path)
    return artifact


__all__ = [
    "ONLY_IMAGES_MESSAGE",
    "save_upload",
    "unique_filename",
    "validate_upload",
]
