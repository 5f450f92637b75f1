import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from kiwi_island.audio import SOUND_EFFECTS, AudioManager  # noqa: E402
from kiwi_island.game import Game  # noqa: E402
from kiwi_island.levels import parse_level  # noqa: E402


class OccupantFactory:
    """Builds raw occupant records as they appear in a level file."""

    @staticmethod
    def _base(kind, name, row, column, description=None, **extra):
        data = {
            "kind": kind,
            "name": name,
            "description": description or f"A {name.lower()}",
            "row": row,
            "column": column,
        }
        data.update(extra)
        return data

    def trap(self, row, column, weight=1.0, size=1.0):
        return self._base("T", "Trap", row, column, weight=weight, size=size)

    def screwdriver(self, row, column, weight=0.5, size=0.5):
        return self._base("T", "Screwdriver", row, column, weight=weight, size=size)

    def food(self, row, column, name="Apple", weight=0.5, size=0.5, energy=5.0):
        return self._base("E", name, row, column, weight=weight, size=size, energy=energy)

    def hazard(self, row, column, name="Hole", impact=0.5, description=None):
        return self._base("H", name, row, column, description=description, impact=impact)

    def kiwi(self, row, column):
        return self._base("K", "Kiwi", row, column)

    def predator(self, row, column, name="Rat"):
        return self._base("P", name, row, column)

    def fauna(self, row, column, name="Tui"):
        return self._base("F", name, row, column)


@pytest.fixture
def occ():
    return OccupantFactory()


@pytest.fixture
def level_data():
    def _make(terrain, player=(0, 0), occupants=(), stamina=100.0, weight=10.0, size=5.0):
        return {
            "rows": len(terrain),
            "columns": len(terrain[0]),
            "terrain": list(terrain),
            "player": {
                "name": "River Song",
                "row": player[0],
                "column": player[1],
                "max_stamina": stamina,
                "max_backpack_weight": weight,
                "max_backpack_size": size,
            },
            "occupants": list(occupants),
        }

    return _make


@pytest.fixture
def make_game(level_data):
    """Factory for a Game on a small hand-written island."""

    def _make(terrain, player=(0, 0), occupants=(), *, config=None, audio=None, **player_kw):
        level = parse_level(level_data(terrain, player, occupants, **player_kw))
        return Game(level, config=config, audio=audio)

    return _make


@pytest.fixture
def audio():
    return AudioManager(SOUND_EFFECTS)
