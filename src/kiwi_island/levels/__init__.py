from .builder import World, build_world
from .loader import load_bundled_level, load_level, parse_legacy_text, parse_level
from .models import LevelDescription, OccupantSpec, PlayerStart
from .selector import MapSelector

__all__ = [
    "LevelDescription",
    "MapSelector",
    "OccupantSpec",
    "PlayerStart",
    "World",
    "build_world",
    "load_bundled_level",
    "load_level",
    "parse_legacy_text",
    "parse_level",
]
