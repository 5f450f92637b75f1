from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional

from ..errors import LevelLoadError
from .loader import LEVEL_SUFFIXES

logger = logging.getLogger(__name__)


class MapSelector:
    """Pick the next level file from a directory, avoiding the one played last.

    With exactly two maps the selector alternates; with more it draws at
    random among the maps other than the previous one; a single map is
    always chosen.
    """

    def __init__(self, directory: Path, rng: Optional[random.Random] = None) -> None:
        self.directory = Path(directory)
        self._rng = rng or random.Random()
        self.previous: Optional[Path] = None

    def available(self) -> List[Path]:
        if not self.directory.is_dir():
            raise LevelLoadError(f"Map directory not found: {self.directory}")
        return sorted(
            p for p in self.directory.iterdir() if p.is_file() and p.suffix.lower() in LEVEL_SUFFIXES
        )

    def select(self) -> Path:
        maps = self.available()
        if not maps:
            raise LevelLoadError(f"No level files in {self.directory}")
        candidates = [p for p in maps if p != self.previous] or maps
        choice = candidates[0] if len(candidates) == 1 else self._rng.choice(candidates)
        logger.debug("Selected map %s (previous %s)", choice, self.previous)
        self.previous = choice
        return choice
