from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .occupants import Elsewhere, Occupant, OccupantKind, Payload
from .position import Position

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class OccupantRegistry:
    """
    Arena of occupant records addressed by stable integer ids.

    Ids are handed out in creation order, so sorting by id reproduces the
    order occupants were read from the level. The registry keeps a per-tile
    index alongside each record's ``location`` field and is the only place
    that moves occupants on or off tiles.
    """

    def __init__(self) -> None:
        self._records: Dict[int, Occupant] = {}
        self._tiles: Dict[Coord, List[int]] = {}
        self._next_id = 1

    def create(
        self,
        kind: OccupantKind,
        name: str,
        description: str,
        payload: Payload,
        image: Optional[str] = None,
    ) -> Occupant:
        occupant = Occupant(
            oid=self._next_id,
            kind=kind,
            name=name,
            description=description,
            payload=payload,
            image=image,
        )
        self._records[occupant.oid] = occupant
        self._next_id += 1
        logger.debug("Created %r", occupant)
        return occupant

    def get(self, oid: int) -> Occupant:
        try:
            return self._records[oid]
        except KeyError as exc:
            raise KeyError(f"Unknown occupant id: {oid}") from exc

    def __contains__(self, occupant: object) -> bool:
        return isinstance(occupant, Occupant) and self._records.get(occupant.oid) is occupant

    def __iter__(self) -> Iterator[Occupant]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def at(self, pos: Position) -> List[Occupant]:
        return [self._records[oid] for oid in sorted(self._tiles.get(pos.coords, []))]

    def count_at(self, pos: Position) -> int:
        return len(self._tiles.get(pos.coords, []))

    def place(self, occupant: Occupant, pos: Position) -> None:
        """Put an occupant on a tile. It must not currently be on a tile or in the backpack."""
        if occupant.location is not Elsewhere.NOWHERE:
            raise ValueError(f"{occupant!r} is already located")
        self._tiles.setdefault(pos.coords, []).append(occupant.oid)
        occupant.location = pos
        logger.debug("Placed %r", occupant)

    def lift(self, occupant: Occupant, pos: Position) -> bool:
        """Take an occupant off the given tile. Returns False if it was not there."""
        oids = self._tiles.get(pos.coords)
        if occupant not in self or not oids or occupant.oid not in oids:
            return False
        oids.remove(occupant.oid)
        if not oids:
            del self._tiles[pos.coords]
        if occupant.location == pos:
            occupant.location = Elsewhere.NOWHERE
        logger.debug("Lifted %r from %s", occupant, pos)
        return True


__all__ = ["OccupantRegistry"]
