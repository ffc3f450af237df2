"""Per-turn visibility and exploration tracking.

:class:`VisibilityTracker` owns the visible-cell array for one level.  It
recomputes field of view only when the observer has moved since the last
update, and folds every visible cell into the grid's ``explored`` array.
Exploration only ever goes from unexplored to explored.
"""

from __future__ import annotations

from typing import Final, Set, Tuple

import numpy as np
import structlog

from roguegrid.world.fov import compute_fov
from roguegrid.world.grid import Grid

log = structlog.get_logger()

# No observer can stand here, so the first update always recomputes.
NO_PREVIOUS_POSITION: Final[Tuple[int, int]] = (-1, -1)
TORCH_RADIUS: Final[int] = 10


class VisibilityTracker:
    """Field-of-view state for one observer on one grid.

    Parameters
    ----------
    width, height:
        Dimensions of the grid this tracker will be updated with.
    radius:
        Sight radius in cells; ``0`` lights only the observer's own cell.
    light_walls:
        Whether the opaque cell that stops a ray is itself visible.
    """

    def __init__(
        self,
        width: int,
        height: int,
        radius: int = TORCH_RADIUS,
        light_walls: bool = True,
    ) -> None:
        if width <= 0 or height <= 0:
            log.error("Invalid tracker dimensions", width=width, height=height)
            raise ValueError("Tracker width and height must be positive integers.")
        if radius < 0:
            raise ValueError("radius must not be negative")
        self.radius = radius
        self.light_walls = light_walls
        self.visible: np.ndarray = np.zeros((height, width), dtype=bool, order="C")
        self._previous_position: Tuple[int, int] = NO_PREVIOUS_POSITION

    @property
    def previous_position(self) -> Tuple[int, int]:
        return self._previous_position

    def reset(self) -> None:
        """Clear visibility and force the next update to recompute."""
        self.visible.fill(False)
        self._previous_position = NO_PREVIOUS_POSITION

    def update(self, grid: Grid, observer: Tuple[int, int]) -> Set[Tuple[int, int]]:
        """Recompute visibility if ``observer`` moved; return newly explored cells."""
        observer = (int(observer[0]), int(observer[1]))
        if observer == self._previous_position:
            return set()
        if self.visible.shape != (grid.height, grid.width):
            raise ValueError("Grid shape does not match tracker shape")

        compute_fov(
            grid.transparent_mask(),
            ~grid.blocked_mask(),
            observer,
            self.radius,
            light_walls=self.light_walls,
            visible=self.visible,
        )
        newly_explored = self.visible & ~grid.explored
        grid.explored |= self.visible
        self._previous_position = observer

        changed = {(int(x), int(y)) for y, x in np.argwhere(newly_explored)}
        if changed:
            log.debug(
                "Exploration updated",
                observer=observer,
                newly_explored=len(changed),
                visible=int(np.count_nonzero(self.visible)),
            )
        return changed

    def is_visible(self, x: int, y: int) -> bool:
        height, width = self.visible.shape
        if not (0 <= x < width and 0 <= y < height):
            return False
        return bool(self.visible[y, x])

    def visible_cells(self) -> Set[Tuple[int, int]]:
        return {(int(x), int(y)) for y, x in np.argwhere(self.visible)}
