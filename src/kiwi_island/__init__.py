from importlib.metadata import version, PackageNotFoundError

from .game import Game, GameState
from .position import Direction, Position
from .terrain import Terrain

__all__ = ["__version__", "Direction", "Game", "GameState", "Position", "Terrain"]

try:
    __version__ = version("kiwi-island")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
