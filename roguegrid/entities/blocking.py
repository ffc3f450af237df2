"""Occupancy predicate shared by movement and monster placement."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from roguegrid.entities.registry import EntityRegistry
    from roguegrid.world.grid import Grid


def is_blocked(x: int, y: int, grid: Grid, entities: EntityRegistry) -> bool:
    """Return ``True`` if nothing may move into ``(x, y)``.

    A cell is blocked when its tile is blocked (cells outside the grid read
    as wall) or an active blocking entity stands on it.
    """
    if grid.at(x, y).blocked:
        return True
    return entities.get_blocking_entity_at(x, y) is not None
