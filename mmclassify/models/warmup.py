"""Model warmup utilities for server startup.

Runs one smoke-test classification right after the text model is acquired so
the first real request does not pay lazy-initialization costs inside the
backend, and so a broken model shows up in the logs at startup.
"""

from __future__ import annotations

import logging
import time

from mmclassify.config.runtime import MODEL_WARMUP_TEXT

from .registry import ModelRegistry

logger = logging.getLogger(__name__)


async def warm_text_model(registry: ModelRegistry, text: str = MODEL_WARMUP_TEXT) -> bool:
    """Classify a fixed sentence with a ready text model.

    Returns:
        True if the smoke test ran; False if the model is not ready or the
        call failed. Failures are logged, never raised.
    """
    instance = registry.instance
    if instance is None:
        logger.warning("warmup: %s model not ready, skipping smoke test", registry.modality.value)
        return False
    start = time.perf_counter()
    try:
        result = await instance(text)
    except Exception:  # noqa: BLE001 - warmup is best effort
        logger.exception("warmup: %s model smoke test failed", registry.modality.value)
        return False
    elapsed = time.perf_counter() - start
    logger.info("warmup: %s model test result=%s in %.2fs", registry.modality.value, result, elapsed)
    return True


__all__ = ["warm_text_model"]
