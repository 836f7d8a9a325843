"""
Power-ups for Chicken Invaders.

A power-up is a falling pickup; collecting one activates a timed effect.
``PowerUpSystem`` owns the timers and answers every question about what
the active effects mean for the player right now.  Effects are derived
from the timer map on demand, never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from chicken_invaders.config import (
    DAMAGE_UP_MULTIPLIER,
    POWER_UP_DURATION_MS,
    RAPID_FIRE_DIVISOR,
    SPREAD_OFFSETS,
)
from chicken_invaders.models.entity import Entity


class PowerUpType(Enum):
    SPREAD_SHOT = "spread_shot"
    RAPID_FIRE = "rapid_fire"
    SHIELD = "shield"
    DAMAGE_UP = "damage_up"


# Spread-shot and rapid-fire drop twice as often as the others.
POWER_UP_WEIGHTS: tuple[PowerUpType, ...] = (
    PowerUpType.SPREAD_SHOT,
    PowerUpType.RAPID_FIRE,
    PowerUpType.SHIELD,
    PowerUpType.DAMAGE_UP,
    PowerUpType.SPREAD_SHOT,
    PowerUpType.RAPID_FIRE,
)


@dataclass
class PowerUp(Entity):
    type: PowerUpType = PowerUpType.SPREAD_SHOT

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["type"] = self.type.value
        return data


ActivePowerUps = dict[PowerUpType, float]


class PowerUpSystem:
    """Timer bookkeeping and derived effects for active power-ups.

    All methods take the ``active`` map explicitly; the system itself holds
    no state, so the same instance serves any number of games.
    """

    duration_ms: float = POWER_UP_DURATION_MS

    # ── Timers ──────────────────────────────────────────────────────────

    def update(self, active: ActivePowerUps, elapsed_ms: float) -> ActivePowerUps:
        """Return *active* aged by *elapsed_ms*, expired entries dropped."""
        remaining: ActivePowerUps = {}
        for kind, left in active.items():
            left -= elapsed_ms
            if left > 0:
                remaining[kind] = left
        return remaining

    def activate(self, active: ActivePowerUps, kind: PowerUpType) -> None:
        """Start or refresh *kind*.  Picking up a duplicate does not stack."""
        active[kind] = self.duration_ms

    # ── Derived effects ─────────────────────────────────────────────────

    @staticmethod
    def is_active(active: ActivePowerUps, kind: PowerUpType) -> bool:
        return active.get(kind, 0) > 0

    def has_shield(self, active: ActivePowerUps) -> bool:
        return self.is_active(active, PowerUpType.SHIELD)

    def absorb_hit(self, active: ActivePowerUps) -> bool:
        """Spend the shield on one hit.  Returns False if there was none."""
        if not self.has_shield(active):
            return False
        del active[PowerUpType.SHIELD]
        return True

    def fire_cooldown(self, active: ActivePowerUps, fire_rate: float) -> float:
        if self.is_active(active, PowerUpType.RAPID_FIRE):
            return fire_rate / RAPID_FIRE_DIVISOR
        return fire_rate

    def spread_offsets(self, active: ActivePowerUps) -> tuple[float, ...]:
        if self.is_active(active, PowerUpType.SPREAD_SHOT):
            return SPREAD_OFFSETS
        return (0.0,)

    def bullet_damage(self, active: ActivePowerUps, base: int = 1) -> int:
        if self.is_active(active, PowerUpType.DAMAGE_UP):
            return base * DAMAGE_UP_MULTIPLIER
        return base
