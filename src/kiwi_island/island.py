from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .exploration import Exploration, ExplorationSettings
from .occupants import Occupant, OccupantKind, Payload
from .position import Position
from .registry import OccupantRegistry
from .terrain import Terrain

if TYPE_CHECKING:
    from .player import Player

logger = logging.getLogger(__name__)

DEFAULT_TILE_CAPACITY = 3
PLAYER_SYMBOL = "@"
HIDDEN_SYMBOL = " "


class Island:
    """
    The island grid: terrain per tile, occupants per tile, exploration state
    and the tile the player currently stands on.

    Coordinates are (row, column), 0-based. Grid access with an off-island
    Position raises IndexError; occupant mutation with one simply fails.
    """

    def __init__(
        self,
        num_rows: int,
        num_columns: int,
        *,
        tile_capacity: int = DEFAULT_TILE_CAPACITY,
        exploration: Optional[ExplorationSettings] = None,
        default_terrain: Terrain = Terrain.SAND,
    ) -> None:
        if num_rows <= 0 or num_columns <= 0:
            raise ValueError("Island rows/columns must be > 0")
        if tile_capacity <= 0:
            raise ValueError("tile_capacity must be > 0")
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.tile_capacity = tile_capacity
        self._terrain: List[List[Terrain]] = [
            [default_terrain for _ in range(num_columns)] for _ in range(num_rows)
        ]
        self.registry = OccupantRegistry()
        self.exploration = Exploration(num_rows, num_columns, exploration)
        self._player_position: Optional[Position] = None
        logger.debug("Island created: %dx%d, tile_capacity=%d", num_rows, num_columns, tile_capacity)

    def position(self, row: int, column: int) -> Position:
        """Create a Position bound to this island's bounds (not validated)."""
        return Position(row, column, self.num_rows, self.num_columns)

    def _check(self, pos: Position) -> None:
        if not pos.is_on_island() or (pos.num_rows, pos.num_columns) != (self.num_rows, self.num_columns):
            raise IndexError(f"{pos!r} is not on this island")

    # Terrain
    def terrain_at(self, pos: Position) -> Terrain:
        self._check(pos)
        return self._terrain[pos.row][pos.column]

    def set_terrain(self, pos: Position, terrain: Terrain) -> None:
        self._check(pos)
        self._terrain[pos.row][pos.column] = terrain

    # Occupants
    def occupants_at(self, pos: Position) -> List[Occupant]:
        if not pos.is_on_island():
            return []
        return self.registry.at(pos)

    def spawn(self, pos: Position, kind: OccupantKind, name: str, description: str, payload: Payload,
              image: Optional[str] = None) -> Optional[Occupant]:
        """Create a new occupant and place it. Returns None if the tile is full."""
        occupant = self.registry.create(kind, name, description, payload, image=image)
        if not self.add_occupant(pos, occupant):
            return None
        return occupant

    def add_occupant(self, pos: Position, occupant: Occupant) -> bool:
        if not pos.is_on_island() or occupant not in self.registry:
            return False
        if self.registry.count_at(pos) >= self.tile_capacity:
            logger.debug("Tile %s full (%d); cannot add %r", pos, self.tile_capacity, occupant)
            return False
        try:
            self.registry.place(occupant, pos)
        except ValueError:
            logger.warning("Refusing to place %r twice", occupant)
            return False
        return True

    def remove_occupant(self, pos: Position, occupant: Occupant) -> bool:
        if not pos.is_on_island():
            return False
        return self.registry.lift(occupant, pos)

    def has_occupant(self, pos: Position, occupant: Occupant) -> bool:
        # records from another island (or an earlier game) may share an id
        return occupant in self.registry and occupant.location == pos

    def has_predator(self, pos: Position) -> bool:
        return self.predator_at(pos) is not None

    def predator_at(self, pos: Position) -> Optional[Occupant]:
        for occupant in self.occupants_at(pos):
            if occupant.kind is OccupantKind.PREDATOR:
                return occupant
        return None

    def occupant_symbols(self, pos: Position) -> str:
        return "".join(o.symbol for o in self.occupants_at(pos))

    def count_kind(self, kind: OccupantKind) -> int:
        return sum(1 for o in self.registry if o.kind is kind)

    # Player tracking and exploration
    def update_player_position(self, player: "Player") -> None:
        pos = player.position
        self._check(pos)
        self._player_position = pos
        self.exploration.reveal_around(pos)

    def has_player(self, pos: Position) -> bool:
        return self._player_position is not None and self._player_position == pos

    def is_visible(self, pos: Position) -> bool:
        self._check(pos)
        return self.exploration.is_visible(pos.row, pos.column)

    def is_explored(self, pos: Position) -> bool:
        self._check(pos)
        return self.exploration.is_explored(pos.row, pos.column)

    def render(self, show_hidden: bool = False) -> str:
        """Text drawing of the island, one line per row.

        Each cell shows the player, else the first occupant, else the terrain.
        Tiles never seen are blank unless ``show_hidden`` is set.
        """
        lines = []
        for row in range(self.num_rows):
            cells = []
            for column in range(self.num_columns):
                pos = self.position(row, column)
                if not show_hidden and not self.exploration.is_visible(row, column):
                    cells.append(HIDDEN_SYMBOL)
                elif self.has_player(pos):
                    cells.append(PLAYER_SYMBOL)
                else:
                    symbols = self.occupant_symbols(pos)
                    cells.append(symbols[0] if symbols else self._terrain[row][column].symbol)
            lines.append("".join(cells))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Island({self.num_rows}x{self.num_columns})"
