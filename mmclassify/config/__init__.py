"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- models: task and model id per modality
- limits: batch sizes, upload cap and inference concurrency
- uploads: transient upload storage
- runtime: startup behavior
- secrets: secrets like API_KEY
- logging: log level and format

Telemetry settings live in config.telemetry and are imported directly by
the telemetry package.
"""

from .models import (
    TEXT_TASK,
    TEXT_MODEL,
    IMAGE_TASK,
    IMAGE_MODEL,
    INFERENCE_DEVICE,
    TEXT_MODEL_LABELS,
    IMAGE_SUPPORTED_FORMATS,
    TEXT_MODEL_DESCRIPTION,
    IMAGE_MODEL_DESCRIPTION,
)
from .limits import (
    TEXT_BATCH_MAX,
    IMAGE_BATCH_MAX,
    UPLOAD_MAX_BYTES,
    MAX_CONCURRENT_INFERENCES,
)
from .uploads import (
    UPLOAD_DIR,
    UPLOAD_CLEANUP_DELAY_S,
    UPLOAD_MIME_PREFIX,
    UPLOAD_PURGE_ON_SHUTDOWN,
    UPLOAD_CHUNK_BYTES,
    IMAGE_FIELD,
    IMAGES_FIELD,
)
from .runtime import (
    WAIT_FOR_MODELS_ON_STARTUP,
    MODEL_WARMUP,
    MODEL_WARMUP_TEXT,
    NOT_READY_RETRY_AFTER_S,
    SERVICE_NAME,
    SERVICE_VERSION,
)
from .secrets import API_KEY
from .logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT


__all__ = [
    # models
    "TEXT_TASK",
    "TEXT_MODEL",
    "IMAGE_TASK",
    "IMAGE_MODEL",
    "INFERENCE_DEVICE",
    "TEXT_MODEL_LABELS",
    "IMAGE_SUPPORTED_FORMATS",
    "TEXT_MODEL_DESCRIPTION",
    "IMAGE_MODEL_DESCRIPTION",
    # limits
    "TEXT_BATCH_MAX",
    "IMAGE_BATCH_MAX",
    "UPLOAD_MAX_BYTES",
    "MAX_CONCURRENT_INFERENCES",
    # uploads
    "UPLOAD_DIR",
    "UPLOAD_CLEANUP_DELAY_S",
    "UPLOAD_MIME_PREFIX",
    "UPLOAD_PURGE_ON_SHUTDOWN",
    "UPLOAD_CHUNK_BYTES",
    "IMAGE_FIELD",
    "IMAGES_FIELD",
    # runtime
    "WAIT_FOR_MODELS_ON_STARTUP",
    "MODEL_WARMUP",
    "MODEL_WARMUP_TEXT",
    "NOT_READY_RETRY_AFTER_S",
    "SERVICE_NAME",
    "SERVICE_VERSION",
    # secrets
    "API_KEY",
    # logging
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
