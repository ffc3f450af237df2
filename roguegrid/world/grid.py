# roguegrid/world/grid.py
from typing import Iterable, List, Tuple

import numpy as np
import structlog

from roguegrid.world.tiles import (
    BLOCKED_LUT,
    BLOCKS_SIGHT_LUT,
    GLYPH_TO_KIND,
    OUT_OF_BOUNDS_TILE,
    Tile,
    TileKind,
)

log = structlog.get_logger()


class Grid:
    """Bounded 2D tile storage for one level.

    Tile kinds and explored flags live in two C-ordered numpy arrays indexed
    ``[y, x]``.  Reads outside the grid return :data:`OUT_OF_BOUNDS_TILE`;
    :meth:`set` does not bounds-check and must only be given in-bounds
    coordinates (use :meth:`set_checked` when that is not guaranteed).
    """

    def __init__(self, width: int, height: int, fill: Tile = OUT_OF_BOUNDS_TILE):
        if width <= 0 or height <= 0:
            log.error("Invalid grid dimensions", width=width, height=height)
            raise ValueError("Grid width and height must be positive integers.")
        self._width = width
        self._height = height

        self.kinds: np.ndarray = np.full(
            (height, width), fill_value=int(fill.kind), dtype=np.uint8, order="C"
        )
        self.explored: np.ndarray = np.full(
            (height, width), fill_value=fill.explored, dtype=bool, order="C"
        )
        log.debug("Grid initialized", shape=(height, width), fill=fill.kind.name)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a grid from strings of ``#`` (wall) and ``.`` (floor)."""
        rows = list(rows)
        if not rows or not rows[0]:
            raise ValueError("Grid rows must be non-empty.")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same length.")
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                kind = GLYPH_TO_KIND.get(char)
                if kind is None:
                    raise ValueError(f"Unknown tile glyph {char!r} at ({x}, {y})")
                grid.kinds[y, x] = kind
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the grid boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            return OUT_OF_BOUNDS_TILE
        return Tile(TileKind(int(self.kinds[y, x])), bool(self.explored[y, x]))

    def set(self, x: int, y: int, tile: Tile) -> None:
        self.kinds[y, x] = tile.kind
        self.explored[y, x] = tile.explored

    def set_checked(self, x: int, y: int, tile: Tile) -> None:
        if not self.in_bounds(x, y):
            log.error("Write outside grid", pos=(x, y), shape=(self._height, self._width))
            raise IndexError(f"({x}, {y}) is outside a {self._width}x{self._height} grid")
        self.set(x, y, tile)

    # --- Derived masks ---
    def blocked_mask(self) -> np.ndarray:
        return BLOCKED_LUT[self.kinds]

    def transparent_mask(self) -> np.ndarray:
        return ~BLOCKS_SIGHT_LUT[self.kinds]

    def empty_mask(self) -> np.ndarray:
        return self.kinds == TileKind.FLOOR

    def floor_positions(self) -> List[Tuple[int, int]]:
        """All floor cells as ``(x, y)`` in row-major order."""
        return [(int(x), int(y)) for y, x in np.argwhere(self.empty_mask())]

    def count(self, kind: TileKind) -> int:
        return int(np.count_nonzero(self.kinds == kind))

    def copy(self) -> "Grid":
        clone = Grid(self._width, self._height)
        clone.kinds[:] = self.kinds
        clone.explored[:] = self.explored
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.kinds, other.kinds) and np.array_equal(
            self.explored, other.explored
        )

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height})"
