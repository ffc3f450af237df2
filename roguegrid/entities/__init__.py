from roguegrid.entities.blocking import is_blocked
from roguegrid.entities.components import Position
from roguegrid.entities.registry import EntityRegistry

__all__ = ["EntityRegistry", "Position", "is_blocked"]
