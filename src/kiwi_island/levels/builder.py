from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import GameConfig
from ..errors import LevelLoadError
from ..exploration import ExplorationSettings
from ..island import Island
from ..occupants import (
    FaunaData,
    FoodData,
    HazardData,
    KiwiData,
    OccupantKind,
    Payload,
    PredatorData,
    ToolData,
)
from ..player import Player
from .models import LevelDescription, OccupantSpec

logger = logging.getLogger(__name__)


@dataclass
class World:
    """A freshly built island with its player and the level's totals."""

    island: Island
    player: Player
    total_kiwis: int
    total_predators: int


def _payload(record: OccupantSpec) -> Payload:
    if record.kind is OccupantKind.TOOL:
        return ToolData(weight=record.weight, size=record.size)
    if record.kind is OccupantKind.FOOD:
        return FoodData(weight=record.weight, size=record.size, energy=record.energy)
    if record.kind is OccupantKind.HAZARD:
        return HazardData(impact=record.impact)
    if record.kind is OccupantKind.KIWI:
        return KiwiData()
    if record.kind is OccupantKind.PREDATOR:
        return PredatorData()
    return FaunaData()


def build_world(level: LevelDescription, config: Optional[GameConfig] = None) -> World:
    """Populate an Island and Player from a level description.

    Occupants are created in level order, which is the order hazards on a
    shared tile are applied. A tile holding more occupants than the configured
    capacity is a load error.
    """
    cfg = config or GameConfig()
    island = Island(
        level.rows,
        level.columns,
        tile_capacity=cfg.tile_capacity,
        exploration=ExplorationSettings(visibility_radius=cfg.visibility_radius),
    )
    for row in range(level.rows):
        for column in range(level.columns):
            island.set_terrain(island.position(row, column), level.terrain_at(row, column))

    start = level.player
    player = Player(
        island.position(start.row, start.column),
        start.name,
        start.max_stamina,
        start.max_backpack_weight,
        start.max_backpack_size,
    )
    island.update_player_position(player)

    for record in level.occupants:
        pos = island.position(record.row, record.column)
        if island.spawn(pos, record.kind, record.name, record.description, _payload(record), image=record.image) is None:
            raise LevelLoadError(
                "Level overfills a tile",
                [f"tile ({record.row},{record.column}) holds at most {cfg.tile_capacity} occupants"],
            )

    world = World(
        island=island,
        player=player,
        total_kiwis=island.count_kind(OccupantKind.KIWI),
        total_predators=island.count_kind(OccupantKind.PREDATOR),
    )
    logger.debug("Built world: %r kiwis=%d predators=%d", island, world.total_kiwis, world.total_predators)
    return world
