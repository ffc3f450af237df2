# roguegrid/world/validation.py
"""Checks that tell a usable level from a degenerate one.

Generators never fail outright; an all-wall room layout or a cave with only
scattered pockets is a valid result.  Callers use these helpers to decide
whether to keep a level or generate another.
"""

from collections import deque
from typing import Set, Tuple

import numpy as np
import structlog

from roguegrid.world.grid import Grid

log = structlog.get_logger()

Cell = Tuple[int, int]

_NEIGHBOURS = ((0, 1), (1, 0), (0, -1), (-1, 0))


def open_region(grid: Grid, start: Cell) -> Set[Cell]:
    """4-connected floor cells reachable from ``start`` (empty if it is wall)."""
    passable = ~grid.blocked_mask()
    sx, sy = start
    if not grid.in_bounds(sx, sy) or not passable[sy, sx]:
        return set()
    queue = deque([start])
    visited = {start}
    while queue:
        cx, cy = queue.popleft()
        for dx, dy in _NEIGHBOURS:
            nx, ny = cx + dx, cy + dy
            if (
                0 <= nx < grid.width
                and 0 <= ny < grid.height
                and passable[ny, nx]
                and (nx, ny) not in visited
            ):
                visited.add((nx, ny))
                queue.append((nx, ny))
    return visited


def largest_open_region(grid: Grid) -> Set[Cell]:
    """The biggest 4-connected set of passable cells, or an empty set."""
    remaining = ~grid.blocked_mask()
    best: Set[Cell] = set()
    while remaining.any():
        y, x = np.argwhere(remaining)[0]
        region = open_region(grid, (int(x), int(y)))
        for rx, ry in region:
            remaining[ry, rx] = False
        if len(region) > len(best):
            best = region
    return best


def is_playable(grid: Grid, min_open_tiles: int, start: Cell | None = None) -> bool:
    """Whether a level offers at least ``min_open_tiles`` connected floor cells.

    With ``start`` the region containing it is measured, otherwise the
    largest region on the grid.
    """
    region = open_region(grid, start) if start is not None else largest_open_region(grid)
    playable = len(region) >= max(1, min_open_tiles)
    if not playable:
        log.info(
            "Level rejected as degenerate",
            open_tiles=len(region),
            required=min_open_tiles,
            start=start,
        )
    return playable
