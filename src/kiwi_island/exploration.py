from __future__ import annotations

from dataclasses import dataclass
from typing import List, Set, Tuple
import logging

from .position import Position

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class ExplorationSettings:
    visibility_radius: int = 1  # Manhattan distance revealed around the player

    def __post_init__(self) -> None:
        if self.visibility_radius < 0:
            raise ValueError("visibility_radius must be >= 0")


class Exploration:
    """
    Visible/explored bookkeeping for an island grid.

    - A tile is *explored* once the player has stood on it.
    - A tile is *visible* once it has been within the visibility radius of the
      player. Visibility is remembered; the island is not re-fogged when the
      player walks away.
    """

    def __init__(self, num_rows: int, num_columns: int, settings: ExplorationSettings | None = None) -> None:
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.settings = settings or ExplorationSettings()
        self._visible: List[List[bool]] = [[False for _ in range(num_columns)] for _ in range(num_rows)]
        self._explored: List[List[bool]] = [[False for _ in range(num_columns)] for _ in range(num_rows)]
        logger.debug(
            "Exploration initialized: %dx%d radius=%d",
            num_rows,
            num_columns,
            self.settings.visibility_radius,
        )

    def _in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.num_rows and 0 <= column < self.num_columns

    def reveal_around(self, pos: Position) -> Set[Coord]:
        """Mark ``pos`` explored and everything within the radius visible.

        Returns the set of coordinates that became visible for the first time.
        """
        if not pos.is_on_island():
            raise ValueError("player position out of bounds")

        self._explored[pos.row][pos.column] = True
        radius = self.settings.visibility_radius
        newly_visible: Set[Coord] = set()
        for drow in range(-radius, radius + 1):
            span = radius - abs(drow)
            for dcol in range(-span, span + 1):
                row, column = pos.row + drow, pos.column + dcol
                if not self._in_bounds(row, column):
                    continue
                if not self._visible[row][column]:
                    self._visible[row][column] = True
                    newly_visible.add((row, column))

        logger.debug("Revealed around %s; %d newly visible tiles", pos, len(newly_visible))
        return newly_visible

    def is_visible(self, row: int, column: int) -> bool:
        if not self._in_bounds(row, column):
            raise IndexError("Tile out of bounds")
        return self._visible[row][column]

    def is_explored(self, row: int, column: int) -> bool:
        if not self._in_bounds(row, column):
            raise IndexError("Tile out of bounds")
        return self._explored[row][column]

