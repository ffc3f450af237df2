import numpy as np
import pytest

from roguegrid.world.grid import Grid
from roguegrid.world.tiles import Tile
from roguegrid.world.visibility import NO_PREVIOUS_POSITION, VisibilityTracker


@pytest.fixture
def open_grid():
    return Grid(11, 11, Tile.empty())


def test_radius_zero_sees_only_observer(open_grid):
    tracker = VisibilityTracker(11, 11, radius=0)
    newly = tracker.update(open_grid, (5, 5))
    assert newly == {(5, 5)}
    assert tracker.visible_cells() == {(5, 5)}
    assert open_grid.explored.sum() == 1


def test_radius_one_reveals_orthogonal_neighbours(open_grid):
    tracker = VisibilityTracker(11, 11, radius=1)
    tracker.update(open_grid, (5, 5))
    for cell in [(5, 5), (4, 5), (6, 5), (5, 4), (5, 6)]:
        assert tracker.is_visible(*cell)
    assert not tracker.is_visible(4, 4)


def test_same_position_does_not_recompute(open_grid):
    tracker = VisibilityTracker(11, 11, radius=3)
    first = tracker.update(open_grid, (2, 2))
    assert first
    explored_before = open_grid.explored.copy()
    visible_before = tracker.visible.copy()
    assert tracker.update(open_grid, (2, 2)) == set()
    assert np.array_equal(open_grid.explored, explored_before)
    assert np.array_equal(tracker.visible, visible_before)


def test_explored_never_shrinks(open_grid):
    tracker = VisibilityTracker(11, 11, radius=2)
    path = [(1, 1), (2, 1), (3, 2), (9, 9), (1, 1)]
    previous = open_grid.explored.copy()
    for step in path:
        tracker.update(open_grid, step)
        assert not (previous & ~open_grid.explored).any()
        # Everything currently visible is explored
        assert not (tracker.visible & ~open_grid.explored).any()
        previous = open_grid.explored.copy()
    # Walking back over known ground explores nothing new
    assert tracker.update(open_grid, (2, 1)) == set()


def test_walls_stop_sight():
    grid = Grid.from_rows(
        [
            ".....",
            "..#..",
            ".....",
        ]
    )
    grid.set(2, 0, Tile.wall())
    grid.set(2, 2, Tile.wall())
    tracker = VisibilityTracker(5, 3, radius=4)
    tracker.update(grid, (0, 1))
    assert tracker.is_visible(2, 1)  # the wall itself
    assert not tracker.is_visible(3, 1)
    assert not tracker.is_visible(4, 1)
    assert not grid.explored[1, 4]


def test_reset_forces_recompute(open_grid):
    tracker = VisibilityTracker(11, 11, radius=1)
    tracker.update(open_grid, (5, 5))
    tracker.reset()
    assert tracker.previous_position == NO_PREVIOUS_POSITION
    assert not tracker.visible.any()
    # Already explored, so nothing is new, but visibility is restored
    assert tracker.update(open_grid, (5, 5)) == set()
    assert tracker.is_visible(5, 5)


def test_is_visible_out_of_bounds_is_false(open_grid):
    tracker = VisibilityTracker(11, 11)
    tracker.update(open_grid, (0, 0))
    assert not tracker.is_visible(-1, 0)
    assert not tracker.is_visible(0, 11)


def test_shape_mismatch_raises():
    tracker = VisibilityTracker(4, 4)
    with pytest.raises(ValueError):
        tracker.update(Grid(5, 4, Tile.empty()), (0, 0))


@pytest.mark.parametrize("kwargs", [dict(width=0, height=3), dict(width=3, height=3, radius=-1)])
def test_invalid_tracker_arguments(kwargs):
    with pytest.raises(ValueError):
        VisibilityTracker(**kwargs)
