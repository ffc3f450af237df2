from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Spatial position on the grid."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)
