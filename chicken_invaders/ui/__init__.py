"""User interface components."""

from .high_scores import HighScoreStore, ScoreStore
from .text import HudText

__all__ = [
    "HighScoreStore",
    "HudText",
    "ScoreStore",
]
