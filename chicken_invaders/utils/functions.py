"""
Shared utility functions for Chicken Invaders.

Provides the rectangle collision test, formation geometry and the
wave-difficulty helpers used across models.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from chicken_invaders.config import (
    BOTTOM_LINE_MARGIN,
    COLLISION_MARGIN,
    DIFFICULTY_PER_WAVE,
)


class Rect(Protocol):
    x: float
    y: float
    width: float
    height: float


# ── Collision ──────────────────────────────────────────────────────────────


def collides(a: Rect, b: Rect, margin: float = COLLISION_MARGIN) -> bool:
    """Return True if *a* and *b* overlap once both are shrunk by *margin*.

    Shrinking both boxes keeps the test symmetric:
    ``collides(a, b) == collides(b, a)``.
    """
    return (
        a.x + margin < b.x + b.width - margin
        and b.x + margin < a.x + a.width - margin
        and a.y + margin < b.y + b.height - margin
        and b.y + margin < a.y + a.height - margin
    )


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into ``[low, high]``."""
    return min(max(value, low), high)


# ── Formation helpers ──────────────────────────────────────────────────────


def formation_bounds(chickens: Iterable[Rect]) -> tuple[float, float]:
    """Return the (left, right) extent of *chickens*, ``(0, 0)`` if none."""
    left = right = None
    for c in chickens:
        if left is None or c.x < left:
            left = c.x
        if right is None or c.x + c.width > right:
            right = c.x + c.width
    if left is None or right is None:
        return (0.0, 0.0)
    return (left, right)


def reached_bottom(
    chickens: Iterable[Rect],
    playfield_height: float,
    margin: float = BOTTOM_LINE_MARGIN,
) -> bool:
    """Return True if any chicken's bottom edge is within *margin* of the floor."""
    line = playfield_height - margin
    return any(c.y + c.height >= line for c in chickens)


# ── Wave helpers ───────────────────────────────────────────────────────────


def wave_difficulty(wave_number: int) -> float:
    """Return the speed-up multiplier for a given wave (1-indexed).

    Formula: 1 + (wave - 1) * 0.15.
    """
    return 1.0 + (wave_number - 1) * DIFFICULTY_PER_WAVE
