"""Request size and concurrency limits configuration."""

from ..helpers.env import env_int


# Batch limits per request
TEXT_BATCH_MAX = env_int("TEXT_BATCH_MAX", 100)
IMAGE_BATCH_MAX = env_int("IMAGE_BATCH_MAX", 10)

# Per-file upload cap (bytes)
UPLOAD_MAX_BYTES = env_int("UPLOAD_MAX_BYTES", 5 * 1024 * 1024)

# Concurrent inference calls per modality; 0 disables the cap
MAX_CONCURRENT_INFERENCES = env_int("MAX_CONCURRENT_INFERENCES", 0)
if MAX_CONCURRENT_INFERENCES < 0:
    raise ValueError(
        f"MAX_CONCURRENT_INFERENCES must be >= 0, got {MAX_CONCURRENT_INFERENCES}."
    )


__all__ = [
    "TEXT_BATCH_MAX",
    "IMAGE_BATCH_MAX",
    "UPLOAD_MAX_BYTES",
    "MAX_CONCURRENT_INFERENCES",
]
