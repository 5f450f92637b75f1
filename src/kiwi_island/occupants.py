from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .position import Position

FATAL_IMPACT = 1.0
BREAK_TRAP_HAZARD = "broken trap"
TRAP_TOOL = "trap"
SCREWDRIVER_TOOL = "screwdriver"


class OccupantKind(str, Enum):
    """Occupant discriminant; the value is the one-letter map representation."""

    TOOL = "T"
    FOOD = "E"
    HAZARD = "H"
    KIWI = "K"
    PREDATOR = "P"
    FAUNA = "F"

    @property
    def is_item(self) -> bool:
        return self in (OccupantKind.TOOL, OccupantKind.FOOD)


class Elsewhere(str, Enum):
    """Locations that are not a tile."""

    BACKPACK = "backpack"
    NOWHERE = "nowhere"


Location = Union[Position, Elsewhere]


@dataclass
class ToolData:
    weight: float
    size: float
    broken: bool = False


@dataclass
class FoodData:
    weight: float
    size: float
    energy: float


@dataclass
class HazardData:
    impact: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.impact <= 1.0):
            raise ValueError("impact must be between 0.0 and 1.0")


@dataclass
class KiwiData:
    counted: bool = False


@dataclass
class PredatorData:
    pass


@dataclass
class FaunaData:
    pass


Payload = Union[ToolData, FoodData, HazardData, KiwiData, PredatorData, FaunaData]

_PAYLOAD_TYPES = {
    OccupantKind.TOOL: ToolData,
    OccupantKind.FOOD: FoodData,
    OccupantKind.HAZARD: HazardData,
    OccupantKind.KIWI: KiwiData,
    OccupantKind.PREDATOR: PredatorData,
    OccupantKind.FAUNA: FaunaData,
}


@dataclass(eq=False)
class Occupant:
    """Any entity placeable on a tile.

    The record is a tagged variant: ``kind`` selects which payload type is
    carried and callers dispatch on it. ``location`` is the single source of
    truth for where the occupant is: a tile Position, the player's backpack,
    or nowhere (never placed, consumed, counted or trapped).

    Records compare by identity; the registry hands out exactly one record per
    id.
    """

    oid: int
    kind: OccupantKind
    name: str
    description: str
    payload: Payload
    location: Location = Elsewhere.NOWHERE
    image: Optional[str] = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.kind]
        if not isinstance(self.payload, expected):
            raise TypeError(f"{self.kind.name} occupant requires {expected.__name__} payload")

    @property
    def symbol(self) -> str:
        return self.kind.value

    @property
    def position(self) -> Optional[Position]:
        return self.location if isinstance(self.location, Position) else None

    @property
    def is_item(self) -> bool:
        return self.kind.is_item

    def is_ok_to_carry(self) -> bool:
        return self.is_item

    # Item payload
    @property
    def weight(self) -> float:
        if isinstance(self.payload, (ToolData, FoodData)):
            return self.payload.weight
        return 0.0

    @property
    def size(self) -> float:
        if isinstance(self.payload, (ToolData, FoodData)):
            return self.payload.size
        return 0.0

    # Tool payload
    @property
    def is_trap(self) -> bool:
        return self.kind is OccupantKind.TOOL and self.name.lower() == TRAP_TOOL

    @property
    def is_screwdriver(self) -> bool:
        return self.kind is OccupantKind.TOOL and self.name.lower() == SCREWDRIVER_TOOL

    @property
    def is_broken(self) -> bool:
        return isinstance(self.payload, ToolData) and self.payload.broken

    def set_broken(self) -> None:
        if isinstance(self.payload, ToolData):
            self.payload.broken = True

    def fix(self) -> bool:
        """Repair a broken tool. Returns False if it was not broken."""
        if not self.is_broken:
            return False
        self.payload.broken = False  # type: ignore[union-attr]
        return True

    # Food payload
    @property
    def energy(self) -> float:
        return self.payload.energy if isinstance(self.payload, FoodData) else 0.0

    # Hazard payload
    @property
    def impact(self) -> float:
        return self.payload.impact if isinstance(self.payload, HazardData) else 0.0

    @property
    def is_fatal(self) -> bool:
        return self.kind is OccupantKind.HAZARD and self.impact == FATAL_IMPACT

    @property
    def is_break_trap(self) -> bool:
        return self.kind is OccupantKind.HAZARD and self.name.lower() == BREAK_TRAP_HAZARD

    # Kiwi payload
    @property
    def counted(self) -> bool:
        return isinstance(self.payload, KiwiData) and self.payload.counted

    def count(self) -> bool:
        """Mark a kiwi counted. Returns False if it was already counted or is not a kiwi."""
        if not isinstance(self.payload, KiwiData) or self.payload.counted:
            return False
        self.payload.counted = True
        return True

    def __repr__(self) -> str:
        return f"Occupant(#{self.oid} {self.kind.name} {self.name!r} @ {self.location!r})"

    def __str__(self) -> str:
        return self.name


__all__ = [
    "Elsewhere",
    "FaunaData",
    "FoodData",
    "HazardData",
    "KiwiData",
    "Location",
    "Occupant",
    "OccupantKind",
    "Payload",
    "PredatorData",
    "ToolData",
]
