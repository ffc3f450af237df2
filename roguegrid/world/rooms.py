# roguegrid/world/rooms.py
from typing import List, Mapping, NamedTuple, Tuple

import structlog

from roguegrid.entities.registry import EntityRegistry
from roguegrid.settings import MonsterTemplate, RoomSettings
from roguegrid.utils.game_rng import GameRNG
from roguegrid.world.grid import Grid
from roguegrid.world.populate import place_room_monsters
from roguegrid.world.rect import Rect
from roguegrid.world.tiles import Tile

log = structlog.get_logger()

FLOOR = Tile.empty()


def create_room(grid: Grid, room: Rect) -> None:
    """Carve the interior of ``room`` to floor, leaving its outline as wall."""
    if not room.has_interior():
        log.warning("Attempted to carve room without interior", rect=room)
        return
    grid.kinds[room.y1 + 1 : room.y2, room.x1 + 1 : room.x2] = FLOOR.kind


def create_h_tunnel(grid: Grid, x1: int, x2: int, y: int) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        grid.set(x, y, FLOOR)


def create_v_tunnel(grid: Grid, y1: int, y2: int, x: int) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        grid.set(x, y, FLOOR)


def connect_rooms(
    grid: Grid,
    prev_center: Tuple[int, int],
    new_center: Tuple[int, int],
    rng: GameRNG,
) -> bool:
    """Join two room centers with an L-shaped corridor.

    Returns ``True`` when the horizontal leg was carved first.
    """
    prev_x, prev_y = prev_center
    new_x, new_y = new_center
    horizontal_first = rng.coin_flip() == "heads"
    if horizontal_first:
        create_h_tunnel(grid, prev_x, new_x, prev_y)
        create_v_tunnel(grid, prev_y, new_y, new_x)
    else:
        create_v_tunnel(grid, prev_y, new_y, prev_x)
        create_h_tunnel(grid, prev_x, new_x, new_y)
    log.debug(
        "Carved corridor",
        start=prev_center,
        end=new_center,
        horizontal_first=horizontal_first,
    )
    return horizontal_first


def _sample_room(
    width: int, height: int, cfg: RoomSettings, rng: GameRNG
) -> Rect | None:
    w = rng.get_int(cfg.room_min_size, cfg.room_max_size)
    h = rng.get_int(cfg.room_min_size, cfg.room_max_size)
    if w >= width or h >= height:
        return None
    x = rng.get_int(0, width - w - 1)
    y = rng.get_int(0, height - h - 1)
    return Rect.from_size(x, y, w, h)


class RoomLayout(NamedTuple):
    grid: Grid
    start: Tuple[int, int]
    rooms: List[Rect]


def generate_rooms(
    width: int,
    height: int,
    entities: EntityRegistry,
    rng: GameRNG | None = None,
    config: RoomSettings | None = None,
    monsters: Mapping[str, MonsterTemplate] | None = None,
) -> Tuple[Grid, Tuple[int, int]]:
    """Generate a rooms-and-corridors level and return ``(grid, start)``."""
    layout = build_room_layout(width, height, entities, rng, config, monsters)
    return layout.grid, layout.start


def build_room_layout(
    width: int,
    height: int,
    entities: EntityRegistry,
    rng: GameRNG | None = None,
    config: RoomSettings | None = None,
    monsters: Mapping[str, MonsterTemplate] | None = None,
) -> RoomLayout:
    """Generate a rooms-and-corridors level, keeping the accepted rooms.

    Up to ``config.max_rooms`` candidate rooms are sampled; a candidate that
    touches or overlaps an accepted room is discarded.  Each accepted room is
    carved, joined to the previous room and populated.  The first room's
    center is the start position, ``(0, 0)`` if no room could be placed.
    """
    cfg = config or RoomSettings()
    rng = rng or GameRNG()
    log.info(
        "Starting room generation",
        width=width,
        height=height,
        seed=rng.initial_seed,
        max_rooms=cfg.max_rooms,
    )

    grid = Grid(width, height, Tile.wall())
    rooms: List[Rect] = []
    starting_position = (0, 0)
    skipped = 0

    for _ in range(cfg.max_rooms):
        new_room = _sample_room(width, height, cfg, rng)
        if new_room is None:
            skipped += 1
            continue
        if any(new_room.intersects(other) for other in rooms):
            continue

        create_room(grid, new_room)
        new_center = new_room.center
        if not rooms:
            starting_position = new_center
        else:
            connect_rooms(grid, rooms[-1].center, new_center, rng)
        place_room_monsters(new_room, entities, rng, cfg.max_room_monsters, monsters)
        rooms.append(new_room)
        log.debug("Room accepted", rect=new_room, index=len(rooms) - 1)

    if not rooms:
        log.warning(
            "Room generation placed no rooms", width=width, height=height, skipped=skipped
        )
    log.info(
        "Room generation complete",
        rooms=len(rooms),
        skipped=skipped,
        start=starting_position,
    )
    return RoomLayout(grid, starting_position, rooms)
