import numpy as np
import pytest

from roguegrid.world.fov import compute_fov


def _make_basic_maps(width: int = 5, height: int = 5):
    transparent = np.ones((height, width), dtype=bool)
    walkable = np.ones((height, width), dtype=bool)
    return transparent, walkable


def test_compute_with_wall_blocks_visibility():
    transparent, walkable = _make_basic_maps()
    # Vertical wall in column 2
    transparent[:, 2] = False
    walkable[:, 2] = False
    origin = (1, 2)
    visible = compute_fov(transparent, walkable, origin, radius=4)
    assert visible[origin[1], origin[0]]
    assert visible[2, 2]  # the wall itself is lit
    assert not visible[:, 3:].any()
    assert visible[2, 0]


def test_light_walls_off_hides_the_blocking_cell():
    transparent, walkable = _make_basic_maps()
    transparent[:, 2] = False
    visible = compute_fov(transparent, walkable, (1, 2), radius=4, light_walls=False)
    assert not visible[:, 2].any()
    assert visible[2, 1]


def test_radius_zero_only_origin_visible():
    transparent, walkable = _make_basic_maps(11, 11)
    visible = compute_fov(transparent, walkable, (5, 5), radius=0)
    assert visible.sum() == 1
    assert visible[5, 5]


def test_radius_one_reveals_orthogonal_neighbours():
    transparent, walkable = _make_basic_maps(11, 11)
    visible = compute_fov(transparent, walkable, (5, 5), radius=1)
    assert {(int(x), int(y)) for y, x in np.argwhere(visible)} == {
        (5, 5), (4, 5), (6, 5), (5, 4), (5, 6)
    }


def test_radius_is_euclidean():
    transparent, walkable = _make_basic_maps(21, 21)
    visible = compute_fov(transparent, walkable, (10, 10), radius=5)
    assert visible[10, 15]
    assert not visible[10, 16]
    assert visible[14, 13]  # 3*3 + 4*4 == 25
    assert not visible[15, 15]


def test_open_room_is_fully_visible():
    transparent, walkable = _make_basic_maps(7, 7)
    visible = compute_fov(transparent, walkable, (3, 3), radius=10)
    assert visible.all()


def test_out_of_bounds_origin_raises():
    transparent, walkable = _make_basic_maps()
    with pytest.raises(ValueError):
        compute_fov(transparent, walkable, (-1, -1), radius=4)
    with pytest.raises(ValueError):
        compute_fov(transparent, walkable, (5, 0), radius=4)


def test_shape_mismatch_raises():
    transparent, _ = _make_basic_maps()
    with pytest.raises(ValueError):
        compute_fov(transparent, np.ones((4, 5), dtype=bool), (1, 1), radius=2)


def test_reuses_and_clears_output_array():
    transparent, walkable = _make_basic_maps()
    out = np.ones((5, 5), dtype=bool)
    result = compute_fov(transparent, walkable, (0, 0), radius=1, visible=out)
    assert result is out
    assert not out[4, 4]
    assert out[0, 0] and out[0, 1] and out[1, 0]
