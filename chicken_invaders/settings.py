"""
Per-tick simulation settings and the responsive layout that derives them.

Settings are recomputed by the host from the viewport size and handed to
the simulation read-only on every tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from chicken_invaders.config import (
    BASE_BULLET_SPEED,
    BASE_CHICKEN_SPEED,
    BASE_EGG_SPEED,
    BASE_PLAYER_SPEED,
    COLUMN_WIDTH,
    DEFAULT_CHICKEN_ROWS,
    DEFAULT_FIRE_RATE,
    MAX_CHICKEN_COLS,
    MAX_PLAYFIELD_HEIGHT,
    MAX_PLAYFIELD_WIDTH,
    MIN_PLAYFIELD_HEIGHT,
    MIN_PLAYFIELD_WIDTH,
    REFERENCE_HEIGHT,
    REFERENCE_WIDTH,
)
from chicken_invaders.utils.functions import clamp


@dataclass(frozen=True)
class Playfield:
    width: float = float(REFERENCE_WIDTH)
    height: float = float(REFERENCE_HEIGHT)


@dataclass(frozen=True)
class Settings:
    """Tunables for one tick.

    ``max_wave`` enables the victory rule: clearing that wave ends the run
    in VICTORY instead of spawning the next one.
    """

    playfield: Playfield = field(default_factory=Playfield)
    player_speed: float = BASE_PLAYER_SPEED
    bullet_speed: float = BASE_BULLET_SPEED
    chicken_speed: float = BASE_CHICKEN_SPEED
    egg_speed: float = BASE_EGG_SPEED
    fire_rate: float = DEFAULT_FIRE_RATE
    chicken_rows: int = DEFAULT_CHICKEN_ROWS
    chicken_cols: int = REFERENCE_WIDTH // COLUMN_WIDTH
    max_wave: Optional[int] = None


def settings_for_viewport(
    width: float,
    height: float,
    max_wave: Optional[int] = None,
) -> Settings:
    """Derive simulation settings from a viewport size.

    The playfield is clamped to a supported range and speeds are scaled so
    that crossing the screen takes the same time at any resolution.
    """
    pf_width = clamp(width, MIN_PLAYFIELD_WIDTH, MAX_PLAYFIELD_WIDTH)
    pf_height = clamp(height, MIN_PLAYFIELD_HEIGHT, MAX_PLAYFIELD_HEIGHT)
    size_scale = min(pf_width / REFERENCE_WIDTH, pf_height / REFERENCE_HEIGHT)

    return Settings(
        playfield=Playfield(width=pf_width, height=pf_height),
        player_speed=BASE_PLAYER_SPEED * size_scale,
        bullet_speed=BASE_BULLET_SPEED * size_scale,
        chicken_speed=BASE_CHICKEN_SPEED * size_scale,
        egg_speed=BASE_EGG_SPEED * size_scale,
        fire_rate=DEFAULT_FIRE_RATE,
        chicken_rows=DEFAULT_CHICKEN_ROWS,
        chicken_cols=min(int(pf_width // COLUMN_WIDTH), MAX_CHICKEN_COLS),
        max_wave=max_wave,
    )
