"""Runtime dependency wiring for startup initialization."""

from .dependencies import RuntimeDeps
from .bootstrap import load_models, build_runtime_deps, schedule_model_loading

__all__ = [
    "build_runtime_deps",
    "load_models",
    "schedule_model_loading",
    "RuntimeDeps",
]
