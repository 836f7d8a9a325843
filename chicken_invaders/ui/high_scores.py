"""
High-score persistence for Chicken Invaders.

Stores the single best score as ``{"high_score": N}`` in a JSON file.
Reading falls back to 0 and writing is best-effort: neither ever raises
into the game loop.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

_DEFAULT_SCORES_FILE = "highscore.json"


class ScoreStore(Protocol):
    """Anything that can remember one integer between runs."""

    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


@dataclass
class HighScoreStore:
    filepath: str = _DEFAULT_SCORES_FILE

    def load(self) -> int:
        """Return the stored high score, or 0 if the file is missing or malformed."""
        if not os.path.isfile(self.filepath):
            return 0
        try:
            with open(self.filepath, "r") as fh:
                data = json.load(fh)
            return self._parse(data)
        except (OSError, ValueError, TypeError):
            logger.warning("Ignoring unreadable high-score file %s", self.filepath)
            return 0

    @staticmethod
    def _parse(data: object) -> int:
        """Accept ``{"high_score": N}`` or a bare number; scores may be strings."""
        if isinstance(data, dict):
            data = data.get("high_score", 0)
        score = int(float(str(data).strip()))
        return max(score, 0)

    def save(self, score: int) -> None:
        """Write *score* if it beats the stored one."""
        if score <= self.load():
            return
        try:
            with open(self.filepath, "w") as fh:
                json.dump({"high_score": int(score)}, fh)
        except OSError:
            logger.warning("Could not write high-score file %s", self.filepath)
