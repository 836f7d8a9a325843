"""
HUD text for Chicken Invaders.

Formats the strings the host draws over the playfield.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from chicken_invaders.state import GameData

_POWER_UP_LABELS = {
    "spread_shot": "SPREAD",
    "rapid_fire": "RAPID",
    "shield": "SHIELD",
    "damage_up": "DAMAGE",
}


@dataclass
class HudText:
    """Formats score, wave, lives and power-up timers for one snapshot."""

    data: GameData

    def format_score(self) -> str:
        return f"SCORE: {self.data.score}"

    def format_high_score(self) -> str:
        return f"HIGH: {max(self.data.score, self.data.high_score)}"

    def format_wave(self) -> str:
        return f"WAVE: {self.data.wave}"

    def format_lives(self) -> str:
        return f"LIVES: {self.data.player.lives}"

    def format_power_ups(self) -> list[str]:
        """One line per active power-up, e.g. ``RAPID 12s``, sorted by name."""
        lines = []
        for kind, left in sorted(
            self.data.active_power_ups.items(), key=lambda item: item[0].value,
        ):
            label = _POWER_UP_LABELS.get(kind.value, kind.value.upper())
            lines.append(f"{label} {math.ceil(left / 1000)}s")
        return lines

    def lines(self) -> list[str]:
        return [
            self.format_score(),
            self.format_high_score(),
            self.format_wave(),
            self.format_lives(),
            *self.format_power_ups(),
        ]
