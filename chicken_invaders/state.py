"""
Aggregate game state for Chicken Invaders.

``GameData`` is the single root object the state machine reads and
produces.  The presentation layer only ever sees it (or its ``to_dict``
snapshot).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from chicken_invaders.config import PLAYER_MAX_HEIGHT, PLAYER_MAX_WIDTH, PLAYER_START_LIVES
from chicken_invaders.models.entity import Bullet, Chicken, Player
from chicken_invaders.models.explosion import Explosion
from chicken_invaders.models.power_up import ActivePowerUps, PowerUp


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    VICTORY = "victory"


TERMINAL_STATES = frozenset({GameState.GAME_OVER, GameState.VICTORY})


def default_player() -> Player:
    return Player(
        id="player",
        x=375.0,
        y=550.0,
        width=PLAYER_MAX_WIDTH,
        height=PLAYER_MAX_HEIGHT,
        lives=PLAYER_START_LIVES,
        shield=False,
    )


@dataclass
class GameData:
    player: Player = field(default_factory=default_player)
    bullets: list[Bullet] = field(default_factory=list)
    chickens: list[Chicken] = field(default_factory=list)
    eggs: list[Bullet] = field(default_factory=list)
    power_ups: list[PowerUp] = field(default_factory=list)
    explosions: list[Explosion] = field(default_factory=list)
    score: int = 0
    wave: int = 1
    high_score: int = 0
    phase: GameState = GameState.MENU
    active_power_ups: ActivePowerUps = field(default_factory=dict)
    last_shot_time: Optional[float] = None
    chicken_direction: int = 1
    chicken_move_timer: float = 0.0
    egg_drop_timer: float = 0.0

    def copy(self) -> GameData:
        """Deep copy, so a transition never touches its input."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly snapshot for the presentation layer."""
        return {
            "player": self.player.to_dict(),
            "bullets": [b.to_dict() for b in self.bullets],
            "chickens": [c.to_dict() for c in self.chickens],
            "eggs": [e.to_dict() for e in self.eggs],
            "power_ups": [p.to_dict() for p in self.power_ups],
            "explosions": [e.to_dict() for e in self.explosions],
            "score": self.score,
            "wave": self.wave,
            "high_score": self.high_score,
            "phase": self.phase.value,
            "active_power_ups": {
                kind.value: left for kind, left in self.active_power_ups.items()
            },
            "last_shot_time": self.last_shot_time,
            "chicken_direction": self.chicken_direction,
            "chicken_move_timer": self.chicken_move_timer,
            "egg_drop_timer": self.egg_drop_timer,
        }
