from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..occupants import OccupantKind
from ..terrain import Terrain


class PlayerStart(BaseModel):
    """Where and how the player begins the level."""

    name: str = Field(..., min_length=1, description="Player display name")
    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0)
    max_stamina: float = Field(..., ge=0)
    max_backpack_weight: float = Field(..., ge=0)
    max_backpack_size: float = Field(..., ge=0)


class OccupantSpec(BaseModel):
    """One occupant as described by a level; kind-specific fields are optional here
    and enforced by the validator below."""

    kind: OccupantKind
    name: str = Field(..., min_length=1)
    description: str = ""
    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    size: Optional[float] = Field(default=None, ge=0)
    energy: Optional[float] = Field(default=None, ge=0)
    impact: Optional[float] = Field(default=None, ge=0, le=1)
    image: Optional[str] = None

    @model_validator(mode="after")
    def require_kind_fields(self) -> "OccupantSpec":
        required = {
            OccupantKind.TOOL: ("weight", "size"),
            OccupantKind.FOOD: ("weight", "size", "energy"),
            OccupantKind.HAZARD: ("impact",),
        }.get(self.kind, ())
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(f"{self.kind.name} '{self.name}' is missing {', '.join(missing)}")
        return self


class LevelDescription(BaseModel):
    """A complete, static level: grid, terrain, player start and occupants."""

    name: str = Field("", description="Optional level title")
    rows: int = Field(..., ge=1)
    columns: int = Field(..., ge=1)
    terrain: List[str] = Field(..., description="One string of terrain symbols per row")
    player: PlayerStart
    occupants: List[OccupantSpec] = Field(default_factory=list)

    @field_validator("terrain")
    @classmethod
    def known_symbols(cls, v: List[str]) -> List[str]:
        for line in v:
            for symbol in line:
                Terrain.from_symbol(symbol)
        return v

    @model_validator(mode="after")
    def check_shape_and_positions(self) -> "LevelDescription":
        if len(self.terrain) != self.rows:
            raise ValueError(f"expected {self.rows} terrain rows, got {len(self.terrain)}")
        for index, line in enumerate(self.terrain):
            if len(line) != self.columns:
                raise ValueError(f"terrain row {index} has {len(line)} columns, expected {self.columns}")
        if not self._on_island(self.player.row, self.player.column):
            raise ValueError(f"player start ({self.player.row},{self.player.column}) is off the island")
        for occ in self.occupants:
            if not self._on_island(occ.row, occ.column):
                raise ValueError(f"occupant '{occ.name}' at ({occ.row},{occ.column}) is off the island")
        return self

    def _on_island(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def terrain_at(self, row: int, column: int) -> Terrain:
        return Terrain.from_symbol(self.terrain[row][column])

    def count(self, kind: OccupantKind) -> int:
        return sum(1 for occ in self.occupants if occ.kind is kind)


__all__ = ["LevelDescription", "OccupantSpec", "PlayerStart"]
