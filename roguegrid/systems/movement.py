"""Movement helper utilities.

Moves are validated against :func:`roguegrid.entities.blocking.is_blocked`
before the registry's position component is updated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from roguegrid.entities.blocking import is_blocked

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from roguegrid.entities.registry import EntityRegistry
    from roguegrid.world.grid import Grid

log = structlog.get_logger()


def try_move(
    entities: EntityRegistry, entity_id: int, dx: int, dy: int, grid: Grid
) -> bool:
    """Attempt to move an entity by ``(dx, dy)``.

    Returns
    -------
    bool
        ``True`` if the entity moved; ``False`` when it does not exist or the
        destination is blocked by a tile, the grid edge or a blocking entity.
    """
    current_pos = entities.get_position(entity_id)
    if current_pos is None:
        return False

    dest = current_pos.offset(dx, dy)
    if is_blocked(dest.x, dest.y, grid, entities):
        log.debug("Move blocked", entity_id=entity_id, dest=tuple(dest))
        return False
    return entities.set_position(entity_id, dest)
