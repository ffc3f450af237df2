from roguegrid.world.caves import count_empty_neighbours, generate_caves
from roguegrid.world.grid import Grid
from roguegrid.world.rect import Rect
from roguegrid.world.rooms import (
    create_h_tunnel,
    create_room,
    create_v_tunnel,
    generate_rooms,
)
from roguegrid.world.tiles import OUT_OF_BOUNDS_TILE, Tile, TileKind
from roguegrid.world.visibility import VisibilityTracker

__all__ = [
    "Grid",
    "OUT_OF_BOUNDS_TILE",
    "Rect",
    "Tile",
    "TileKind",
    "VisibilityTracker",
    "count_empty_neighbours",
    "create_h_tunnel",
    "create_room",
    "create_v_tunnel",
    "generate_caves",
    "generate_rooms",
]
