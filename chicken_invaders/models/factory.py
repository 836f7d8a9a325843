"""
Entity construction for Chicken Invaders.

``EntityFactory`` builds every entity the simulation spawns.  It owns the
id counter and draws all of its randomness from an injected
``random.Random`` so that a seeded game replays identically.
"""

from __future__ import annotations

import itertools
import math
import random
from dataclasses import dataclass, field
from typing import Iterator

from chicken_invaders.config import (
    BOSS_HEIGHT_RATIO,
    BOSS_HP,
    BOSS_MAX_SIZE,
    BOSS_POINTS,
    BOSS_RIGHT_OFFSET,
    BOSS_SIZE_RATIO,
    BOSS_Y_MIN,
    BOSS_Y_RATIO,
    BULLET_HEIGHT,
    BULLET_WIDTH,
    CHICKEN_HEIGHT_RATIO,
    CHICKEN_MAX_WIDTH,
    CHICKEN_MIN_HEIGHT,
    CHICKEN_MIN_SPACING_X,
    CHICKEN_MIN_SPACING_Y,
    CHICKEN_MIN_WIDTH,
    CHICKEN_ROW_GAP,
    EXPLOSION_DURATION_MS,
    EXPLOSION_SIZE,
    POINTS_BASE,
    POINTS_PER_ROW,
    POWER_UP_SIZE,
    STRONG_CHICKEN_HP,
    STRONG_ROWS,
    WEAK_CHICKEN_HP,
)
from chicken_invaders.models.entity import Bullet, Chicken
from chicken_invaders.models.explosion import Explosion
from chicken_invaders.models.power_up import POWER_UP_WEIGHTS, PowerUp, PowerUpType


@dataclass
class EntityFactory:
    rng: random.Random = field(default_factory=random.Random)
    _ids: Iterator[int] = field(default_factory=itertools.count, repr=False)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    # ── Chickens ────────────────────────────────────────────────────────

    def make_chicken_grid(
        self,
        rows: int,
        cols: int,
        start_x: float,
        start_y: float,
        playfield_width: float,
    ) -> list[Chicken]:
        """Lay out a *rows* x *cols* formation between the side margins.

        Chickens are sized to fit ``playfield_width - 2 * start_x`` and
        emitted left to right, top to bottom.  The first two rows take two
        hits; back rows are worth more points.
        """
        if rows <= 0 or cols <= 0:
            return []

        available = playfield_width - start_x * 2
        width = max(CHICKEN_MIN_WIDTH, min(CHICKEN_MAX_WIDTH, available / (cols * 1.5)))
        height = max(CHICKEN_MIN_HEIGHT, math.floor(width * CHICKEN_HEIGHT_RATIO))

        if cols > 1:
            spacing_x = max(CHICKEN_MIN_SPACING_X, (available - cols * width) / (cols - 1))
        else:
            spacing_x = CHICKEN_MIN_SPACING_X
        spacing_y = max(CHICKEN_MIN_SPACING_Y, height + CHICKEN_ROW_GAP)

        chickens: list[Chicken] = []
        for row in range(rows):
            hp = STRONG_CHICKEN_HP if row < STRONG_ROWS else WEAK_CHICKEN_HP
            for col in range(cols):
                chickens.append(Chicken(
                    id=self.next_id("chicken"),
                    x=start_x + col * (width + spacing_x),
                    y=start_y + row * spacing_y,
                    width=width,
                    height=height,
                    hp=hp,
                    max_hp=hp,
                    points=(rows - row) * POINTS_PER_ROW + POINTS_BASE,
                    row=row,
                    col=col,
                ))
        return chickens

    def make_boss(self, playfield_width: float, playfield_height: float) -> list[Chicken]:
        """Return the two heavy chickens of a boss wave, near the top centre."""
        size = min(BOSS_MAX_SIZE, playfield_width * BOSS_SIZE_RATIO)
        height = math.floor(size * BOSS_HEIGHT_RATIO)
        y = max(BOSS_Y_MIN, playfield_height * BOSS_Y_RATIO)
        xs = (
            playfield_width / 2 - size,
            playfield_width / 2 + BOSS_RIGHT_OFFSET,
        )
        return [
            Chicken(
                id=self.next_id("boss"),
                x=x,
                y=y,
                width=size,
                height=height,
                hp=BOSS_HP,
                max_hp=BOSS_HP,
                points=BOSS_POINTS,
                row=0,
                col=col,
            )
            for col, x in enumerate(xs)
        ]

    # ── Projectiles and pickups ─────────────────────────────────────────

    def _projectile(
        self, prefix: str, x: float, y: float, speed: float, damage: int,
    ) -> Bullet:
        return Bullet(
            id=self.next_id(prefix),
            x=x - BULLET_WIDTH / 2,
            y=y,
            width=BULLET_WIDTH,
            height=BULLET_HEIGHT,
            speed=speed,
            damage=damage,
        )

    def make_bullet(self, x: float, y: float, speed: float, damage: int = 1) -> Bullet:
        """Bullet with its top edge at *y*, horizontally centred on *x*."""
        return self._projectile("bullet", x, y, speed, damage)

    def make_egg(self, x: float, y: float, speed: float) -> Bullet:
        return self._projectile("egg", x, y, speed, 1)

    def make_power_up(self, x: float, y: float, kind: PowerUpType) -> PowerUp:
        return PowerUp(
            id=self.next_id("powerup"),
            x=x - POWER_UP_SIZE / 2,
            y=y,
            width=POWER_UP_SIZE,
            height=POWER_UP_SIZE,
            type=kind,
        )

    def make_explosion(self, x: float, y: float, size: float = EXPLOSION_SIZE) -> Explosion:
        """Explosion centred on (*x*, *y*)."""
        return Explosion(
            id=self.next_id("explosion"),
            x=x - size / 2,
            y=y - size / 2,
            width=size,
            height=size,
            duration=EXPLOSION_DURATION_MS,
            max_duration=EXPLOSION_DURATION_MS,
        )

    # ── Random picks ────────────────────────────────────────────────────

    def pick_power_up_type(self) -> PowerUpType:
        return self.rng.choice(POWER_UP_WEIGHTS)

    def roll(self, chance: float) -> bool:
        """Return True with probability *chance*."""
        return self.rng.random() < chance
