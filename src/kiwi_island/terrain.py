from __future__ import annotations

from enum import Enum


class Terrain(Enum):
    """Tile kinds with their map symbol, stamina cost and passability."""

    SAND = (".", 1.1, True)
    FOREST = ("*", 1.5, True)
    WETLAND = ("#", 1.8, True)
    SCRUB = ("^", 1.3, True)
    WATER = ("~", 2.0, False)

    def __init__(self, symbol: str, cost: float, passable: bool) -> None:
        self.symbol = symbol
        self.cost = cost
        self.passable = passable

    @classmethod
    def from_symbol(cls, symbol: str) -> "Terrain":
        for terrain in cls:
            if terrain.symbol == symbol:
                return terrain
        raise ValueError(f"Unknown terrain symbol: {symbol!r}")
