# roguegrid/world/fov.py
"""
Field of View (FOV) calculation.
Numba-accelerated ray casting: a Bresenham ray is traced from the origin to
every cell on the square perimeter at ``radius``.  A ray lights each cell it
crosses and stops at the first opaque cell or the grid edge.
"""

import time
from typing import TypeAlias

import numba
import numpy as np
import structlog

Point: TypeAlias = tuple[int, int]

log = structlog.get_logger(__name__)


@numba.njit(cache=True)
def _cast_ray(
    transparent: np.ndarray, ox: int, oy: int, tx: int, ty: int,
    radius_sq: int, light_walls: bool, visible: np.ndarray
) -> None:
    """Trace one ray from the origin towards ``(tx, ty)``."""
    height, width = transparent.shape
    dx = abs(tx - ox)
    dy = -abs(ty - oy)
    sx = 1 if ox < tx else -1
    sy = 1 if oy < ty else -1
    err = dx + dy
    x, y = ox, oy

    while x != tx or y != ty:
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

        if x < 0 or y < 0 or x >= width or y >= height:
            return
        rx = x - ox
        ry = y - oy
        if rx * rx + ry * ry > radius_sq:
            return
        if transparent[y, x]:
            visible[y, x] = True
        else:
            if light_walls:
                visible[y, x] = True
            return


@numba.njit(cache=True)
def _compute_fov_core(
    transparent: np.ndarray, ox: int, oy: int, radius: int,
    light_walls: bool, visible: np.ndarray
) -> None:
    visible[oy, ox] = True
    if radius <= 0:
        return
    radius_sq = radius * radius
    for tx in range(ox - radius, ox + radius + 1):
        _cast_ray(transparent, ox, oy, tx, oy - radius, radius_sq, light_walls, visible)
        _cast_ray(transparent, ox, oy, tx, oy + radius, radius_sq, light_walls, visible)
    for ty in range(oy - radius + 1, oy + radius):
        _cast_ray(transparent, ox, oy, ox - radius, ty, radius_sq, light_walls, visible)
        _cast_ray(transparent, ox, oy, ox + radius, ty, radius_sq, light_walls, visible)


def compute_fov(
    transparent: np.ndarray,
    walkable: np.ndarray,
    origin_xy: Point,
    radius: int,
    light_walls: bool = True,
    visible: np.ndarray | None = None,
) -> np.ndarray:
    """
    Compute the cells visible from ``origin_xy`` within ``radius``.

    ``walkable`` is accepted alongside ``transparent`` so the call shape stays
    stable for algorithms that treat doors differently; ray casting only
    consults transparency.  Returns ``visible`` (cleared first) or a new
    boolean array of the same shape.
    """
    if not isinstance(transparent, np.ndarray) or transparent.ndim != 2:
        raise TypeError("transparent must be a 2D NumPy array")
    if walkable.shape != transparent.shape:
        raise ValueError("Grid shapes must match")
    if not np.issubdtype(transparent.dtype, np.bool_):
        transparent = transparent.astype(np.bool_)

    height, width = transparent.shape
    ox, oy = origin_xy
    if not (0 <= ox < width and 0 <= oy < height):
        log.error("FOV origin out of bounds", origin=origin_xy, shape=transparent.shape)
        raise ValueError("Origin coordinates out of bounds")

    if visible is None:
        visible = np.zeros((height, width), dtype=np.bool_)
    elif visible.shape != transparent.shape or not np.issubdtype(visible.dtype, np.bool_):
        raise TypeError("visible must be a boolean array matching the grid shape")
    else:
        visible.fill(False)

    start_time = time.perf_counter()
    _compute_fov_core(
        np.ascontiguousarray(transparent), int(ox), int(oy), int(radius),
        bool(light_walls), visible
    )
    duration_ms = (time.perf_counter() - start_time) * 1000
    log.debug(
        "FOV computation finished",
        origin=origin_xy,
        radius=radius,
        duration_ms=f"{duration_ms:.2f}",
        visible_count=int(np.count_nonzero(visible)),
    )
    return visible
