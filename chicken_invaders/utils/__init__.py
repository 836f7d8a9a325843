"""Utility functions and helpers."""

from .functions import (
    clamp,
    collides,
    formation_bounds,
    reached_bottom,
    wave_difficulty,
)
from .commands import (
    AdvanceWave,
    Command,
    ForceGameOver,
    MovePlayer,
    Pause,
    Restart,
    Resume,
    Shoot,
    Start,
    Tick,
)

__all__ = [
    "clamp",
    "collides",
    "formation_bounds",
    "reached_bottom",
    "wave_difficulty",
    "AdvanceWave",
    "Command",
    "ForceGameOver",
    "MovePlayer",
    "Pause",
    "Restart",
    "Resume",
    "Shoot",
    "Start",
    "Tick",
]
