import json
import random
from pathlib import Path

import pytest
import yaml

from kiwi_island.config import GameConfig
from kiwi_island.errors import LevelLoadError
from kiwi_island.levels import (
    MapSelector,
    build_world,
    load_bundled_level,
    load_level,
    parse_legacy_text,
    parse_level,
)
from kiwi_island.occupants import OccupantKind
from kiwi_island.terrain import Terrain

LEGACY = """2,3,
.*~,
#^.,
Kiri,0,0,20.0,4.0,3.0,
3,
T,Trap,A trap,0,1,1.0,1.0,
E,Apple,A red apple,1,2,0.5,0.5,2.5,
H,Hole,A hole,1,0,0.4
"""


def test_yaml_level(tmp_path: Path, level_data, occ):
    path = tmp_path / "small.yaml"
    path.write_text(yaml.safe_dump(level_data(["..", ".~"], occupants=[occ.kiwi(0, 1)])), encoding="utf-8")
    level = load_level(path)
    assert level.name == "small"
    assert level.terrain_at(1, 1) is Terrain.WATER
    assert level.count(OccupantKind.KIWI) == 1


def test_json_level(tmp_path: Path, level_data, occ):
    data = level_data(["..."], occupants=[occ.trap(0, 2)])
    data["name"] = "Beach"
    path = tmp_path / "beach.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    level = load_level(path)
    assert level.name == "Beach"
    assert level.occupants[0].weight == 1.0


def test_legacy_text_format():
    data = parse_legacy_text(LEGACY)
    assert data["terrain"] == [".*~", "#^."]
    assert data["player"]["name"] == "Kiri"
    assert data["player"]["max_backpack_size"] == 3.0
    kinds = [o["kind"] for o in data["occupants"]]
    assert kinds == ["T", "E", "H"]
    assert data["occupants"][1]["energy"] == 2.5
    assert data["occupants"][2]["impact"] == 0.4
    level = parse_level(data)
    assert level.rows == 2


def test_legacy_text_truncated():
    with pytest.raises(LevelLoadError) as ei:
        parse_legacy_text("2,3,.*~")
    assert "end of level data" in ei.value.to_human()


def test_legacy_text_bad_number():
    with pytest.raises(LevelLoadError) as ei:
        parse_legacy_text("two,3")
    assert "rows" in ei.value.to_human()


def test_schema_errors_are_reported(level_data, occ):
    data = level_data(["..."], occupants=[occ.kiwi(0, 0)])
    data["occupants"].append({"kind": "T", "name": "Trap", "description": "", "row": 0, "column": 1})
    data["terrain"] = ["..x"]
    with pytest.raises(LevelLoadError) as ei:
        parse_level(data)
    human = ei.value.to_human()
    assert "schema" in human.lower()
    assert len(ei.value.details) >= 2


@pytest.mark.parametrize(
    "terrain,player,occupant_pos",
    [
        (["...", ".."], (0, 0), (0, 0)),
        (["..."], (0, 5), (0, 0)),
        (["..."], (0, 0), (2, 0)),
    ],
)
def test_inconsistent_levels_rejected(level_data, occ, terrain, player, occupant_pos):
    data = level_data(terrain, player=player, occupants=[occ.kiwi(*occupant_pos)])
    data["rows"] = 1 if len(terrain) == 1 else 2
    data["columns"] = 3
    with pytest.raises(LevelLoadError):
        parse_level(data)


def test_missing_and_unsupported_files(tmp_path: Path):
    with pytest.raises(LevelLoadError):
        load_level(tmp_path / "nowhere.yaml")
    odd = tmp_path / "level.ini"
    odd.write_text("rows=1", encoding="utf-8")
    with pytest.raises(LevelLoadError) as ei:
        load_level(odd)
    assert "Unsupported" in str(ei.value)


def test_invalid_yaml(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("rows: [1,\n", encoding="utf-8")
    with pytest.raises(LevelLoadError):
        load_level(path)


def test_bundled_levels_agree():
    yaml_level = load_bundled_level()
    legacy_level = load_bundled_level("IslandData.txt")
    assert yaml_level.name == "Kiwi Island"
    assert yaml_level.model_dump(exclude={"name"}) == legacy_level.model_dump(exclude={"name"})


def test_build_world_from_bundled_level():
    world = build_world(load_bundled_level())
    assert world.total_kiwis == 3
    assert world.total_predators == 3
    assert world.player.name == "River Song"
    assert world.island.has_player(world.island.position(4, 5))
    assert world.island.is_visible(world.island.position(3, 5))


def test_build_world_rejects_overfilled_tile(level_data, occ):
    level = parse_level(level_data(["..."], occupants=[occ.kiwi(0, 1), occ.kiwi(0, 1), occ.fauna(0, 1)]))
    with pytest.raises(LevelLoadError) as ei:
        build_world(level, GameConfig(tile_capacity=2))
    assert "at most 2" in ei.value.to_human()


def _write_maps(directory: Path, names):
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text("", encoding="utf-8")
    (directory / "notes.md").write_text("", encoding="utf-8")


def test_selector_alternates_between_two_maps(tmp_path: Path):
    _write_maps(tmp_path, ["a.yaml", "b.txt"])
    selector = MapSelector(tmp_path, rng=random.Random(3))
    picks = [selector.select().name for _ in range(5)]
    for previous, current in zip(picks, picks[1:]):
        assert previous != current
    assert set(picks) == {"a.yaml", "b.txt"}


def test_selector_never_repeats_with_many_maps(tmp_path: Path):
    _write_maps(tmp_path, ["a.yaml", "b.yaml", "c.json", "d.txt"])
    selector = MapSelector(tmp_path, rng=random.Random(7))
    assert len(selector.available()) == 4
    last = None
    for _ in range(30):
        current = selector.select()
        assert current != last
        last = current


def test_selector_single_map_and_errors(tmp_path: Path):
    _write_maps(tmp_path / "one", ["only.yaml"])
    selector = MapSelector(tmp_path / "one")
    assert selector.select().name == "only.yaml"
    assert selector.select().name == "only.yaml"

    with pytest.raises(LevelLoadError):
        MapSelector(tmp_path / "missing").select()
    (tmp_path / "empty").mkdir()
    with pytest.raises(LevelLoadError):
        MapSelector(tmp_path / "empty").select()
