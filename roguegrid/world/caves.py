# roguegrid/world/caves.py
"""
Cave generation with a cellular automaton.
Random noise is smoothed by a birth/death rule over the 8 neighbours of each
cell.  Every pass reads only the previous generation: two buffers are
allocated once and swapped after each full scan.
"""

from typing import Mapping

import numba
import numpy as np
import structlog

from roguegrid.entities.registry import EntityRegistry
from roguegrid.settings import CaveSettings, MonsterTemplate
from roguegrid.utils.game_rng import GameRNG
from roguegrid.world.grid import Grid
from roguegrid.world.populate import scatter_monsters
from roguegrid.world.tiles import Tile, TileKind

log = structlog.get_logger()


@numba.njit(cache=True)
def _count_empty_neighbours(empty: np.ndarray, x: int, y: int) -> int:
    height, width = empty.shape
    count = 0
    for dy in range(-1, 2):
        for dx in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            nx = x + dx
            ny = y + dy
            # Off-grid neighbours count as wall.
            if nx < 0 or ny < 0 or nx >= width or ny >= height:
                continue
            if empty[ny, nx]:
                count += 1
    return count


@numba.njit(cache=True)
def cave_step(
    current: np.ndarray, out: np.ndarray, death_limit: int, birth_limit: int
) -> None:
    """Write the next automaton generation of ``current`` into ``out``."""
    height, width = current.shape
    for y in range(height):
        for x in range(width):
            neighbours = _count_empty_neighbours(current, x, y)
            if current[y, x]:
                out[y, x] = neighbours >= death_limit
            else:
                out[y, x] = neighbours > birth_limit


def count_empty_neighbours(grid: Grid, x: int, y: int) -> int:
    """Number of floor cells among the 8 neighbours of ``(x, y)``."""
    return int(_count_empty_neighbours(grid.empty_mask(), x, y))


def smooth(
    empty: np.ndarray, steps: int, death_limit: int, birth_limit: int
) -> np.ndarray:
    """Run ``steps`` automaton passes over a boolean floor mask."""
    front = np.array(empty, dtype=np.bool_, order="C")
    back = np.empty_like(front)
    for _ in range(steps):
        cave_step(front, back, death_limit, birth_limit)
        front, back = back, front
    return front


def generate_caves(
    width: int,
    height: int,
    entities: EntityRegistry,
    rng: GameRNG | None = None,
    config: CaveSettings | None = None,
    monsters: Mapping[str, MonsterTemplate] | None = None,
) -> Grid:
    """Generate a cave level and scatter monsters over its open cells.

    No start position is chosen here; callers pick a floor cell themselves.
    """
    cfg = config or CaveSettings()
    rng = rng or GameRNG()
    func_log = log.bind(width=width, height=height, seed=rng.initial_seed)
    func_log.info("Starting cave generation", empty_chance=cfg.empty_chance)

    grid = Grid(width, height, Tile.wall())
    seeded = rng.random_mask((height, width), cfg.empty_chance)
    func_log.debug("Seeded noise", empty=int(np.count_nonzero(seeded)))

    empty = smooth(seeded, cfg.smoothing_steps, cfg.death_limit, cfg.birth_limit)
    grid.kinds[:] = np.where(empty, TileKind.FLOOR, TileKind.WALL)

    floor_count = int(np.count_nonzero(empty))
    if floor_count == 0:
        func_log.warning("Cave generation produced no floor tiles")
    else:
        func_log.info(
            "Cave smoothed", steps=cfg.smoothing_steps, floor_tiles=floor_count
        )

    scatter_monsters(
        grid, entities, rng, cfg.desired_monsters, cfg.max_spawn_attempts, monsters
    )
    return grid
