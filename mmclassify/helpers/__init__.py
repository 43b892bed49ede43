"""Helper functions shared by config and runtime modules."""

from .env import env_flag, env_float, env_int

__all__ = [
    "env_flag",
    "env_float",
    "env_int",
]
