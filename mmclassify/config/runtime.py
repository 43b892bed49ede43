"""Startup behavior configuration."""

from ..helpers.env import env_flag


# Block the startup hook until every model has been acquired
WAIT_FOR_MODELS_ON_STARTUP = env_flag("WAIT_FOR_MODELS_ON_STARTUP", False)

# Run a smoke-test classification once the text model is ready
MODEL_WARMUP = env_flag("MODEL_WARMUP", True)
MODEL_WARMUP_TEXT = "This is a test message"

# Seconds clients should wait before retrying a 503
NOT_READY_RETRY_AFTER_S = 5

SERVICE_NAME = "Multi-Modal AI Classification API"
SERVICE_VERSION = "1.0.0"


__all__ = [
    "WAIT_FOR_MODELS_ON_STARTUP",
    "MODEL_WARMUP",
    "MODEL_WARMUP_TEXT",
    "NOT_READY_RETRY_AFTER_S",
    "SERVICE_NAME",
    "SERVICE_VERSION",
]
