"""Tile-grid dungeon and cave generation with exploration tracking."""

from roguegrid.entities import EntityRegistry, is_blocked
from roguegrid.level import Level, LevelGenerationError, build_level
from roguegrid.settings import WorldSettings, load_settings
from roguegrid.utils.game_rng import GameRNG
from roguegrid.world import (
    Grid,
    Tile,
    TileKind,
    VisibilityTracker,
    generate_caves,
    generate_rooms,
)

__version__ = "0.1.0"

__all__ = [
    "EntityRegistry",
    "GameRNG",
    "Grid",
    "Level",
    "LevelGenerationError",
    "Tile",
    "TileKind",
    "VisibilityTracker",
    "WorldSettings",
    "build_level",
    "generate_caves",
    "generate_rooms",
    "is_blocked",
    "load_settings",
]
