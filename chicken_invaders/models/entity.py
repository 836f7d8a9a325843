"""
Entity types for Chicken Invaders.

Every entity is an axis-aligned rectangle with a collection-unique id.
Positions are the top-left corner in playfield pixels, y growing down.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Entity:
    id: str
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class Player(Entity):
    """The player ship.  ``shield`` mirrors an active shield power-up."""

    lives: int = 0
    shield: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(lives=self.lives, shield=self.shield)
        return data


@dataclass
class Bullet(Entity):
    """A projectile.  Player bullets fly up, eggs use the same shape and fall."""

    speed: float = 0.0
    damage: int = 1

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(speed=self.speed, damage=self.damage)
        return data


@dataclass
class Chicken(Entity):
    """A formation member.  ``hp`` never exceeds ``max_hp``."""

    hp: int = 1
    max_hp: int = 1
    points: int = 0
    row: int = 0
    col: int = 0

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: int) -> bool:
        """Subtract *amount* hp.  Returns True if this killed the chicken."""
        self.hp -= amount
        return self.is_dead

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            hp=self.hp,
            max_hp=self.max_hp,
            points=self.points,
            row=self.row,
            col=self.col,
        )
        return data
