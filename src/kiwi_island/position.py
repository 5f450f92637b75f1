from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Cardinal move directions as (row delta, column delta)."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


@dataclass(frozen=True)
class Position:
    """A grid coordinate bound to the dimensions of one island.

    Coordinates are (row, column) with (0, 0) at the top-left corner. A
    Position may describe a cell outside the island (for example the result of
    :meth:`neighbor` at the edge); check :meth:`is_on_island` before using it
    for grid access.
    """

    row: int
    column: int
    num_rows: int
    num_columns: int

    def is_on_island(self) -> bool:
        return 0 <= self.row < self.num_rows and 0 <= self.column < self.num_columns

    def neighbor(self, direction: Direction) -> "Position":
        drow, dcol = direction.delta
        return Position(self.row + drow, self.column + dcol, self.num_rows, self.num_columns)

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.row, self.column)

    def __repr__(self) -> str:
        return f"Position({self.row},{self.column})"
