"""Pytest collection rules and process environment for the test suite."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

# Config modules read the environment at import time.
os.environ["API_KEY"] = "test-key"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="mmclassify-uploads-"))
os.environ.setdefault("MODEL_WARMUP", "0")


def _is_collectable_test_module(path: Path) -> bool:
    if path.suffix != ".py" or path.name == "__init__.py":
        return False
    return "unit" in path.parts


def pytest_collect_file(file_path: Path, parent):
    """Collect non-prefixed test modules under tests/unit."""
    if not _is_collectable_test_module(file_path):
        return None
    return pytest.Module.from_parent(parent, path=file_path)
