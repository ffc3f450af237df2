# roguegrid/world/populate.py
"""Monster placement for freshly generated levels.

Room mode drops monsters anywhere inside a room's interior without checking
for other monsters, so two spawns may share a cell.  Cave mode samples random
cells and keeps only those that are not blocked.
"""

from typing import List, Mapping

import structlog

from roguegrid.entities.blocking import is_blocked
from roguegrid.entities.registry import EntityRegistry
from roguegrid.settings import DEFAULT_MONSTERS, MonsterTemplate
from roguegrid.utils.game_rng import GameRNG
from roguegrid.world.grid import Grid
from roguegrid.world.rect import Rect

log = structlog.get_logger()

MAX_ROOM_MONSTERS = 3


def spawn_monster(
    entities: EntityRegistry,
    x: int,
    y: int,
    rng: GameRNG,
    monsters: Mapping[str, MonsterTemplate] | None = None,
) -> int:
    """Create one living, blocking monster of a weighted-random type."""
    table = monsters or DEFAULT_MONSTERS
    names = list(table)
    weights = [table[n].weight for n in names]
    # Cached CDFs are per table, so the key carries the weights too.
    name = rng.weighted_choice(
        names, weights, cache_key=tuple(zip(names, weights))
    )
    return entities.create_entity(
        x=x,
        y=y,
        glyph=table[name].glyph,
        name=name,
        blocks_movement=True,
        is_alive=True,
    )


def place_room_monsters(
    room: Rect,
    entities: EntityRegistry,
    rng: GameRNG,
    max_room_monsters: int = MAX_ROOM_MONSTERS,
    monsters: Mapping[str, MonsterTemplate] | None = None,
) -> List[int]:
    if not room.has_interior():
        return []
    num_monsters = rng.get_int(0, max_room_monsters)
    spawned = []
    for _ in range(num_monsters):
        x = rng.get_int(room.x1 + 1, room.x2 - 1)
        y = rng.get_int(room.y1 + 1, room.y2 - 1)
        spawned.append(spawn_monster(entities, x, y, rng, monsters))
    log.debug("Room populated", room=room, monsters=len(spawned))
    return spawned


def scatter_monsters(
    grid: Grid,
    entities: EntityRegistry,
    rng: GameRNG,
    desired: int,
    max_attempts: int,
    monsters: Mapping[str, MonsterTemplate] | None = None,
) -> List[int]:
    """Rejection-sample spawn cells across the whole grid.

    Stops after ``desired`` spawns or ``max_attempts`` samples, whichever
    comes first; running out of attempts simply yields fewer monsters.
    """
    spawned: List[int] = []
    attempts = 0
    while attempts < max_attempts and len(spawned) < desired:
        x = rng.get_int(0, grid.width - 1)
        y = rng.get_int(0, grid.height - 1)
        if not is_blocked(x, y, grid, entities):
            spawned.append(spawn_monster(entities, x, y, rng, monsters))
        attempts += 1

    log.info(
        "Monsters scattered",
        spawned=len(spawned),
        desired=desired,
        attempts=attempts,
    )
    return spawned
