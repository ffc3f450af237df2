# roguegrid/world/rect.py
from typing import Iterator, NamedTuple, Tuple


class Rect(NamedTuple):
    """A room outline on the grid.

    ``(x2, y2)`` is one past the last interior cell, so the interior of a room
    is ``x1+1 .. x2-1`` by ``y1+1 .. y2-1`` and the outline stays wall.
    """
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        if w <= 0 or h <= 0:
            raise ValueError(f"Rect size must be positive, got {w}x{h}")
        return cls(x, y, x + w, y + h)

    @property
    def center(self) -> Tuple[int, int]:
        """Center coordinates of the rectangle."""
        center_x = (self.x1 + self.x2) // 2
        center_y = (self.y1 + self.y2) // 2
        return center_x, center_y

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def intersects(self, other: "Rect") -> bool:
        """True if the rectangles overlap or share an edge."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.y1 + 1, self.y2):
            for x in range(self.x1 + 1, self.x2):
                yield x, y

    def has_interior(self) -> bool:
        return self.x2 - self.x1 >= 2 and self.y2 - self.y1 >= 2
