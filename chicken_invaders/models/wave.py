"""
Wave direction for Chicken Invaders.

Moves the formation in discrete, timer-gated steps (bounce off the side
margins and descend), picks which chicken drops the next egg, and builds
the chickens for each new wave, including the boss wave every fifth wave.
Later waves run the same steps more often rather than taking bigger ones.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from chicken_invaders.config import (
    BASE_EGG_DROP_INTERVAL_MS,
    BASE_MOVE_INTERVAL_MS,
    BOSS_WAVE_INTERVAL,
    EGG_TARGET_CANDIDATES,
    FORMATION_MARGIN_MIN,
    FORMATION_MARGIN_RATIO,
    FORMATION_STEP_DOWN_MIN,
    FORMATION_STEP_DOWN_RATIO,
    FORMATION_STEP_X_MIN,
    FORMATION_STEP_X_RATIO,
    GRID_START_X_MIN,
    GRID_START_X_RATIO,
    GRID_START_Y_MIN,
    GRID_START_Y_RATIO,
    MAX_GRID_ROWS,
    WAVES_PER_EXTRA_ROW,
)
from chicken_invaders.models.entity import Bullet, Chicken
from chicken_invaders.models.factory import EntityFactory
from chicken_invaders.utils.functions import formation_bounds, wave_difficulty

if TYPE_CHECKING:
    from chicken_invaders.settings import Settings
    from chicken_invaders.state import GameData

logger = logging.getLogger(__name__)


# ── Geometry helpers ───────────────────────────────────────────────────────


def formation_margin(playfield_width: float) -> float:
    return max(FORMATION_MARGIN_MIN, playfield_width * FORMATION_MARGIN_RATIO)


def formation_step_x(playfield_width: float) -> float:
    return max(FORMATION_STEP_X_MIN, playfield_width * FORMATION_STEP_X_RATIO)


def formation_step_down(playfield_height: float) -> float:
    return max(FORMATION_STEP_DOWN_MIN, playfield_height * FORMATION_STEP_DOWN_RATIO)


def grid_origin(settings: Settings) -> tuple[float, float]:
    """Top-left corner of a fresh chicken grid."""
    pf = settings.playfield
    return (
        max(GRID_START_X_MIN, pf.width * GRID_START_X_RATIO),
        max(GRID_START_Y_MIN, pf.height * GRID_START_Y_RATIO),
    )


def is_boss_wave(wave_number: int) -> bool:
    return wave_number % BOSS_WAVE_INTERVAL == 0


def rows_for_wave(wave_number: int, base_rows: int) -> int:
    return min(base_rows + wave_number // WAVES_PER_EXTRA_ROW, MAX_GRID_ROWS)


# ── Wave director ──────────────────────────────────────────────────────────


@dataclass
class WaveDirector:
    factory: EntityFactory = field(default_factory=EntityFactory)

    # Intervals ────────────────────────────────────────────────────────────

    def move_interval(self, wave_number: int, settings: Settings) -> float:
        """Milliseconds between formation steps; infinite if chickens are frozen."""
        rate = settings.chicken_speed * wave_difficulty(wave_number)
        if rate <= 0:
            return math.inf
        return BASE_MOVE_INTERVAL_MS / rate

    def egg_interval(self, wave_number: int) -> float:
        return BASE_EGG_DROP_INTERVAL_MS / wave_difficulty(wave_number)

    # Formation movement ───────────────────────────────────────────────────

    def update_formation(self, data: GameData, elapsed_ms: float, settings: Settings) -> bool:
        """Accumulate *elapsed_ms*; take one step when the interval is reached.

        Returns True if the formation moved.
        """
        data.chicken_move_timer += elapsed_ms
        if data.chicken_move_timer < self.move_interval(data.wave, settings):
            return False
        self.step_formation(data, settings)
        data.chicken_move_timer = 0.0
        return True

    def step_formation(self, data: GameData, settings: Settings) -> None:
        """Move every chicken one step sideways, or reverse and descend.

        The formation reverses when the step would carry its leading edge
        onto the side margin, so after a sideways step the formation always
        lies strictly inside ``[margin, width - margin]``.
        """
        if not data.chickens:
            return

        pf = settings.playfield
        margin = formation_margin(pf.width)
        step_x = formation_step_x(pf.width)
        left, right = formation_bounds(data.chickens)

        if (
            (data.chicken_direction > 0 and right + step_x >= pf.width - margin)
            or (data.chicken_direction < 0 and left - step_x <= margin)
        ):
            data.chicken_direction = -data.chicken_direction
            step_down = formation_step_down(pf.height)
            for chicken in data.chickens:
                chicken.y += step_down
        else:
            dx = data.chicken_direction * step_x
            for chicken in data.chickens:
                chicken.x += dx

    # Egg drops ────────────────────────────────────────────────────────────

    def update_egg_drop(
        self, data: GameData, elapsed_ms: float, settings: Settings,
    ) -> Optional[Bullet]:
        """Accumulate *elapsed_ms*; drop an egg when the interval is reached."""
        data.egg_drop_timer += elapsed_ms
        if data.egg_drop_timer < self.egg_interval(data.wave):
            return None
        data.egg_drop_timer = 0.0
        egg = self.drop_egg(data, settings)
        if egg is not None:
            data.eggs.append(egg)
        return egg

    def pick_egg_dropper(self, data: GameData) -> Optional[Chicken]:
        """Pick one of the chickens horizontally closest to the player."""
        if not data.chickens:
            return None
        target = data.player.center_x
        nearest = sorted(data.chickens, key=lambda c: abs(c.center_x - target))
        return self.factory.rng.choice(nearest[:EGG_TARGET_CANDIDATES])

    def drop_egg(self, data: GameData, settings: Settings) -> Optional[Bullet]:
        dropper = self.pick_egg_dropper(data)
        if dropper is None:
            return None
        return self.factory.make_egg(dropper.center_x, dropper.bottom, settings.egg_speed)

    # Waves ────────────────────────────────────────────────────────────────

    def spawn_chickens(self, wave_number: int, settings: Settings) -> list[Chicken]:
        """Build the formation for *wave_number*."""
        pf = settings.playfield
        if is_boss_wave(wave_number):
            return self.factory.make_boss(pf.width, pf.height)
        start_x, start_y = grid_origin(settings)
        return self.factory.make_chicken_grid(
            rows_for_wave(wave_number, settings.chicken_rows),
            settings.chicken_cols,
            start_x,
            start_y,
            pf.width,
        )

    def first_wave(self, settings: Settings) -> list[Chicken]:
        """Wave one uses the configured row count unchanged."""
        start_x, start_y = grid_origin(settings)
        return self.factory.make_chicken_grid(
            settings.chicken_rows,
            settings.chicken_cols,
            start_x,
            start_y,
            settings.playfield.width,
        )

    def advance(self, data: GameData, settings: Settings) -> None:
        """Move *data* on to the next wave with a fresh formation."""
        data.wave += 1
        data.chickens = self.spawn_chickens(data.wave, settings)
        data.bullets = []
        data.eggs = []
        data.explosions = []
        data.chicken_direction = 1
        data.chicken_move_timer = 0.0
        data.egg_drop_timer = 0.0
        logger.info(
            "Wave %d begins (%s, %d chickens)",
            data.wave,
            "boss" if is_boss_wave(data.wave) else "grid",
            len(data.chickens),
        )
