"""
Explosion model for Chicken Invaders.

Explosions are cosmetic: they count down a fixed lifetime and are culled
once it runs out.  Nothing in the simulation collides with them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chicken_invaders.config import EXPLOSION_DURATION_MS
from chicken_invaders.models.entity import Entity


@dataclass
class Explosion(Entity):
    """A square burst centred where something was hit.

    ``duration`` counts down from ``max_duration`` in milliseconds.
    """

    duration: float = EXPLOSION_DURATION_MS
    max_duration: float = EXPLOSION_DURATION_MS

    @property
    def is_active(self) -> bool:
        return self.duration > 0

    @property
    def progress(self) -> float:
        """Fraction of the lifetime already elapsed, in ``[0, 1]``."""
        if self.max_duration <= 0:
            return 1.0
        return min(max(1.0 - self.duration / self.max_duration, 0.0), 1.0)

    def update(self, elapsed_ms: float) -> None:
        """Advance the countdown by *elapsed_ms*."""
        if not self.is_active:
            return
        self.duration -= elapsed_ms

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(duration=self.duration, max_duration=self.max_duration)
        return data
