"""Runtime dependency container.

All long-lived runtime services are assembled at startup and passed explicitly
through request handlers. Nothing in the request path reaches for a
module-level singleton.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mmclassify.state import Modality

if TYPE_CHECKING:
    from mmclassify.models import ModelRegistry
    from mmclassify.handlers.limits import InferenceLimiter
    from mmclassify.handlers.artifacts import ArtifactManager


@dataclass(slots=True)
class RuntimeDeps:
    """Process-wide runtime services initialized during startup."""

    text: ModelRegistry
    image: ModelRegistry
    artifacts: ArtifactManager
    limiters: dict[Modality, InferenceLimiter] = field(default_factory=dict)

    def registry(self, modality: Modality) -> ModelRegistry:
        return self.text if modality is Modality.TEXT else self.image

    def startup_order(self) -> tuple[ModelRegistry, ...]:
        """Registries in the order their models are loaded at startup."""
        return (self.image, self.text)

    def limiter(self, modality: Modality) -> InferenceLimiter:
        limiter = self.limiters.get(modality)
        if limiter is None:
            from mmclassify.handlers.limits import InferenceLimiter  # noqa: PLC0415

            limiter = self.limiters[modality] = InferenceLimiter(modality.value)
        return limiter

    def health(self) -> dict[str, Any]:
        return {
            self.text.modality.value: self.text.status(),
            self.image.modality.value: self.image.status(),
        }

    async def shutdown(self) -> None:
        """Cancel in-flight acquisitions and flush pending artifact deletions."""
        for registry in self.startup_order():
            await registry.shutdown()
        await self.artifacts.shutdown()


__all__ = ["RuntimeDeps"]
