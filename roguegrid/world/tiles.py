# roguegrid/world/tiles.py
"""Tile kinds and the immutable :class:`Tile` value type.

``blocked`` and ``blocks_sight`` are looked up from :data:`TILE_TYPES` by
kind rather than stored per tile, so only the defined combinations exist.
"""

from enum import IntEnum
from typing import Final, NamedTuple

import numpy as np


class TileKind(IntEnum):
    FLOOR = 0
    WALL = 1


class TileType(NamedTuple):
    blocked: bool
    blocks_sight: bool
    glyph: str


TILE_TYPES: Final[dict[TileKind, TileType]] = {
    TileKind.FLOOR: TileType(blocked=False, blocks_sight=False, glyph="."),
    TileKind.WALL: TileType(blocked=True, blocks_sight=True, glyph="#"),
}

# Lookup tables indexed by kind id, used to derive whole-grid masks.
BLOCKED_LUT: Final[np.ndarray] = np.array(
    [TILE_TYPES[k].blocked for k in sorted(TILE_TYPES)], dtype=bool
)
BLOCKS_SIGHT_LUT: Final[np.ndarray] = np.array(
    [TILE_TYPES[k].blocks_sight for k in sorted(TILE_TYPES)], dtype=bool
)
GLYPH_TO_KIND: Final[dict[str, TileKind]] = {
    t.glyph: kind for kind, t in TILE_TYPES.items()
}


class Tile(NamedTuple):
    kind: TileKind
    explored: bool = False

    @classmethod
    def wall(cls) -> "Tile":
        return cls(TileKind.WALL)

    @classmethod
    def empty(cls) -> "Tile":
        return cls(TileKind.FLOOR)

    @property
    def blocked(self) -> bool:
        return TILE_TYPES[self.kind].blocked

    @property
    def blocks_sight(self) -> bool:
        return TILE_TYPES[self.kind].blocks_sight

    @property
    def is_wall(self) -> bool:
        return self.kind == TileKind.WALL


# Returned for every read outside the grid.
OUT_OF_BOUNDS_TILE: Final[Tile] = Tile.wall()

__all__ = [
    "TileKind",
    "TileType",
    "TILE_TYPES",
    "Tile",
    "OUT_OF_BOUNDS_TILE",
    "BLOCKED_LUT",
    "BLOCKS_SIGHT_LUT",
    "GLYPH_TO_KIND",
]
