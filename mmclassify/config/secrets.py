"""Secrets and authentication related configuration."""

import os


# API key for authentication (all /classify endpoints)
API_KEY = os.getenv("API_KEY")
if not API_KEY:
    raise ValueError("API_KEY environment variable is required")


__all__ = ["API_KEY"]
