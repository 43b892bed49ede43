"""Logging helpers and context utilities."""

from .context import (
    log_context,
    set_log_context,
    reset_log_context,
    current_client_id,
    configure_logging,
    current_request_id,
    install_log_context,
)

__all__ = [
    "configure_logging",
    "current_client_id",
    "current_request_id",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
]
