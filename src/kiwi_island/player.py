from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .occupants import Elsewhere, Occupant
from .position import Position
from .terrain import Terrain

logger = logging.getLogger(__name__)

# terrain costs are decimal fractions; absorb float drift when comparing
STAMINA_TOLERANCE = 1e-9


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only view of the player's gauges for display."""

    stamina: float
    maximum_stamina: float
    backpack_weight: float
    maximum_backpack_weight: float
    backpack_size: float
    maximum_backpack_size: float


class Player:
    """The island explorer: position, stamina and a capacity-limited backpack."""

    def __init__(
        self,
        position: Position,
        name: str,
        maximum_stamina: float,
        maximum_backpack_weight: float,
        maximum_backpack_size: float,
    ) -> None:
        if not position.is_on_island():
            raise ValueError("player must start on the island")
        if maximum_stamina < 0 or maximum_backpack_weight < 0 or maximum_backpack_size < 0:
            raise ValueError("player maxima must be >= 0")
        self.position = position
        self.name = name
        self.maximum_stamina = maximum_stamina
        self.stamina = maximum_stamina
        self.maximum_backpack_weight = maximum_backpack_weight
        self.maximum_backpack_size = maximum_backpack_size
        self._inventory: Dict[int, Occupant] = {}
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def is_alive(self) -> bool:
        return self._alive

    def kill(self) -> None:
        if self._alive:
            logger.info("Player %s has died", self.name)
        self._alive = False

    # Stamina
    def has_stamina_to_move(self, terrain: Terrain) -> bool:
        return terrain.passable and self.stamina + STAMINA_TOLERANCE >= terrain.cost

    def move_to_position(self, pos: Position, terrain: Terrain) -> bool:
        if not pos.is_on_island() or not self.has_stamina_to_move(terrain):
            return False
        self.reduce_stamina(terrain.cost)
        self.position = pos
        return True

    def increase_stamina(self, amount: float) -> None:
        self.stamina = min(self.maximum_stamina, self.stamina + amount)

    def reduce_stamina(self, amount: float) -> None:
        self.stamina -= amount

    # Backpack
    @property
    def backpack_weight(self) -> float:
        return sum(item.weight for item in self._inventory.values())

    @property
    def backpack_size(self) -> float:
        return sum(item.size for item in self._inventory.values())

    @property
    def inventory(self) -> List[Occupant]:
        return list(self._inventory.values())

    def has_item(self, item: Occupant) -> bool:
        return self._inventory.get(item.oid) is item

    def can_carry(self, item: Occupant) -> bool:
        """Would ``item`` fit in the backpack alongside what is already held?"""
        if not item.is_ok_to_carry() or self.has_item(item):
            return False
        return (
            self.backpack_weight + item.weight <= self.maximum_backpack_weight
            and self.backpack_size + item.size <= self.maximum_backpack_size
        )

    def collect(self, item: Occupant) -> bool:
        """Put a loose item into the backpack.

        Fails for non-items, items already held, items still lying on a tile
        and items that would exceed the weight or size limit.
        """
        if item.location is not Elsewhere.NOWHERE or not self.can_carry(item):
            return False
        self._inventory[item.oid] = item
        item.location = Elsewhere.BACKPACK
        logger.debug("%s collected %r", self.name, item)
        return True

    def drop(self, item: Occupant) -> bool:
        if not self.has_item(item):
            return False
        del self._inventory[item.oid]
        item.location = Elsewhere.NOWHERE
        logger.debug("%s dropped %r", self.name, item)
        return True

    def has_trap(self) -> bool:
        return self.get_trap() is not None

    def get_trap(self) -> Optional[Occupant]:
        for item in self._inventory.values():
            if item.is_trap:
                return item
        return None

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            stamina=self.stamina,
            maximum_stamina=self.maximum_stamina,
            backpack_weight=self.backpack_weight,
            maximum_backpack_weight=self.maximum_backpack_weight,
            backpack_size=self.backpack_size,
            maximum_backpack_size=self.maximum_backpack_size,
        )

    def __repr__(self) -> str:
        return f"Player({self.name}@{self.position} stamina={self.stamina}/{self.maximum_stamina})"


__all__ = ["Player", "PlayerSnapshot"]
