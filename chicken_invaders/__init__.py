"""
Chicken Invaders - a formation shooter simulation.

The player ship defends against descending rows of chickens that march
in lock-step and drop eggs.
"""

__version__ = "1.0.0"

from .game import Game, Simulation
from .settings import Playfield, Settings, settings_for_viewport
from .state import GameData, GameState

__all__ = [
    "Game",
    "GameData",
    "GameState",
    "Playfield",
    "Settings",
    "Simulation",
    "settings_for_viewport",
]
