"""
Commands accepted by the simulation.

The host translates keyboard, mouse and frame-timer events into these
values and dispatches them between ticks.  The set is closed: anything
else handed to the state machine is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from chicken_invaders.settings import Settings


@dataclass(frozen=True)
class Start:
    settings: Settings


@dataclass(frozen=True)
class Tick:
    elapsed_ms: float
    settings: Settings


@dataclass(frozen=True)
class MovePlayer:
    """Place the player at (*x*, *y*); the sender clamps to the playfield."""
    x: float
    y: float


@dataclass(frozen=True)
class Shoot:
    now_ms: float
    fire_rate: float


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class Restart:
    pass


@dataclass(frozen=True)
class ForceGameOver:
    pass


@dataclass(frozen=True)
class AdvanceWave:
    settings: Settings


Command = Union[
    Start,
    Tick,
    MovePlayer,
    Shoot,
    Pause,
    Resume,
    Restart,
    ForceGameOver,
    AdvanceWave,
]
