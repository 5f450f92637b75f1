import pytest

from kiwi_island.exploration import ExplorationSettings
from kiwi_island.island import Island
from kiwi_island.occupants import FaunaData, KiwiData, OccupantKind, PredatorData, ToolData
from kiwi_island.player import Player
from kiwi_island.terrain import Terrain


def test_terrain_defaults_and_updates():
    island = Island(2, 3)
    pos = island.position(1, 2)
    assert island.terrain_at(pos) is Terrain.SAND
    island.set_terrain(pos, Terrain.WATER)
    assert island.terrain_at(pos) is Terrain.WATER


def test_off_island_grid_access_raises():
    island = Island(2, 2)
    with pytest.raises(IndexError):
        island.terrain_at(island.position(2, 0))
    assert island.occupants_at(island.position(-1, 0)) == []


def test_tile_capacity_is_enforced():
    island = Island(2, 2, tile_capacity=2)
    pos = island.position(0, 0)
    assert island.spawn(pos, OccupantKind.FAUNA, "Tui", "", FaunaData()) is not None
    assert island.spawn(pos, OccupantKind.KIWI, "Kiwi", "", KiwiData()) is not None
    assert island.spawn(pos, OccupantKind.PREDATOR, "Rat", "", PredatorData()) is None
    assert len(island.occupants_at(pos)) == 2
    assert island.occupant_symbols(pos) == "FK"


def test_add_and_remove_occupant():
    island = Island(2, 2)
    pos = island.position(1, 0)
    rat = island.registry.create(OccupantKind.PREDATOR, "Rat", "A rat", PredatorData())
    assert not island.add_occupant(island.position(5, 5), rat)
    assert island.add_occupant(pos, rat)
    assert island.has_occupant(pos, rat)
    assert island.has_predator(pos)
    assert island.predator_at(pos) is rat
    assert island.remove_occupant(pos, rat)
    assert not island.remove_occupant(pos, rat)
    assert not island.has_predator(pos)


def test_foreign_occupant_is_rejected():
    island = Island(2, 2)
    other = Island(2, 2)
    trap = other.registry.create(OccupantKind.TOOL, "Trap", "", ToolData(1.0, 1.0))
    assert not island.add_occupant(island.position(0, 0), trap)


def test_player_position_reveals_neighbourhood():
    island = Island(5, 5, exploration=ExplorationSettings(visibility_radius=1))
    player = Player(island.position(2, 2), "Kiri", 10.0, 5.0, 5.0)
    island.update_player_position(player)

    assert island.has_player(island.position(2, 2))
    assert island.is_explored(island.position(2, 2))
    for r, c in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        assert island.is_visible(island.position(r, c))
        assert not island.is_explored(island.position(r, c))
    # diagonals are two steps away
    assert not island.is_visible(island.position(1, 1))


def test_render_hides_unseen_tiles():
    island = Island(1, 3)
    island.set_terrain(island.position(0, 2), Terrain.WATER)
    island.spawn(island.position(0, 1), OccupantKind.KIWI, "Kiwi", "", KiwiData())
    player = Player(island.position(0, 0), "Kiri", 10.0, 5.0, 5.0)
    island.update_player_position(player)

    assert island.render() == "@K "
    assert island.render(show_hidden=True) == "@K~"
