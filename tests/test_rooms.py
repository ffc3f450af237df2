import itertools

import pytest

from roguegrid.entities.registry import EntityRegistry
from roguegrid.settings import RoomSettings
from roguegrid.utils.game_rng import GameRNG
from roguegrid.world.grid import Grid
from roguegrid.world.rect import Rect
from roguegrid.world.rooms import (
    build_room_layout,
    connect_rooms,
    create_h_tunnel,
    create_room,
    create_v_tunnel,
    generate_rooms,
)
from roguegrid.world.tiles import Tile


class ScriptedRNG:
    """Returns queued integers, then the lower bound; flips follow ``flips``."""

    def __init__(self, ints, flips=()):
        self.initial_seed = 0
        self.ints = list(ints)
        self.flips = list(flips)

    def get_int(self, a, b):
        if self.ints:
            value = self.ints.pop(0)
            assert a <= value <= b
            return value
        return a

    def coin_flip(self, heads_probability=0.5):
        return self.flips.pop(0) if self.flips else "heads"

    def weighted_choice(self, items, weights, cache_key=None):
        return items[0]


def test_rect_from_size_and_center():
    room = Rect.from_size(2, 2, 4, 4)
    assert room == Rect(2, 2, 6, 6)
    assert room.center == (4, 4)
    assert room.width == 4 and room.height == 4
    with pytest.raises(ValueError):
        Rect.from_size(0, 0, 0, 3)


def test_rect_intersection_is_edge_inclusive():
    a = Rect(0, 0, 4, 4)
    assert a.intersects(Rect(4, 0, 8, 4))  # shared vertical edge
    assert a.intersects(Rect(4, 4, 6, 6))  # shared corner
    assert a.intersects(Rect(1, 1, 2, 2))  # contained
    assert not a.intersects(Rect(5, 0, 8, 4))
    assert not a.intersects(Rect(0, 5, 4, 8))


def test_single_room_scenario_carves_interior_only():
    cfg = RoomSettings(max_rooms=1, room_min_size=4, room_max_size=4, max_room_monsters=0)
    rng = ScriptedRNG([4, 4, 2, 2])
    entities = EntityRegistry()

    grid, start = generate_rooms(10, 10, entities, rng, cfg)

    interior = {(x, y) for x in range(3, 6) for y in range(3, 6)}
    for y in range(10):
        for x in range(10):
            assert grid.at(x, y).blocked == ((x, y) not in interior)
    assert start == (4, 4)
    assert len(entities) == 0


def test_no_rooms_gives_origin_start_and_all_walls():
    cfg = RoomSettings(max_rooms=5, room_min_size=6, room_max_size=10)
    grid, start = generate_rooms(5, 5, EntityRegistry(), GameRNG(seed=3), cfg)
    assert start == (0, 0)
    assert not grid.empty_mask().any()


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_accepted_rooms_never_intersect(seed):
    layout = build_room_layout(80, 45, EntityRegistry(), GameRNG(seed=seed))
    assert layout.rooms
    for a, b in itertools.combinations(layout.rooms, 2):
        assert not a.intersects(b)
    assert layout.start == layout.rooms[0].center
    for room in layout.rooms:
        assert 0 <= room.x1 and room.x2 < 80
        assert 0 <= room.y1 and room.y2 < 45
        # Interiors are fully open
        for x, y in room.interior():
            assert not layout.grid.at(x, y).blocked


@pytest.mark.parametrize("seed", [5, 99])
def test_room_generation_is_deterministic(seed):
    first, start_a = generate_rooms(60, 30, EntityRegistry(), GameRNG(seed=seed))
    second, start_b = generate_rooms(60, 30, EntityRegistry(), GameRNG(seed=seed))
    assert first == second
    assert start_a == start_b


def test_tunnels_are_inclusive_in_either_direction():
    grid = Grid(10, 10, Tile.wall())
    create_h_tunnel(grid, 7, 2, 4)
    create_v_tunnel(grid, 8, 5, 1)
    assert {(x, 4) for x in range(2, 8)} | {(1, y) for y in range(5, 9)} == set(
        grid.floor_positions()
    )


@pytest.mark.parametrize("flip", ["heads", "tails"])
def test_corridor_is_one_right_angle_walk(flip):
    grid = Grid(12, 12, Tile.wall())
    start, end = (2, 3), (9, 8)
    horizontal_first = connect_rooms(grid, start, end, ScriptedRNG([], [flip]))
    assert horizontal_first == (flip == "heads")

    corner = (end[0], start[1]) if horizontal_first else (start[0], end[1])
    leg_one = {
        (x, y)
        for x in range(min(start[0], corner[0]), max(start[0], corner[0]) + 1)
        for y in range(min(start[1], corner[1]), max(start[1], corner[1]) + 1)
    }
    leg_two = {
        (x, y)
        for x in range(min(corner[0], end[0]), max(corner[0], end[0]) + 1)
        for y in range(min(corner[1], end[1]), max(corner[1], end[1]) + 1)
    }
    assert set(grid.floor_positions()) == leg_one | leg_two


def test_create_room_leaves_outline():
    grid = Grid(8, 8, Tile.wall())
    create_room(grid, Rect(1, 1, 5, 4))
    assert set(grid.floor_positions()) == {(x, y) for x in range(2, 5) for y in range(2, 4)}
