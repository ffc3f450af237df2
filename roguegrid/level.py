# roguegrid/level.py
"""Level assembly and the per-turn driver.

The generators in :mod:`roguegrid.world` never retry on their own.  This
module owns that policy: it generates with a fresh child seed, rejects
degenerate layouts, places the player and hands back a :class:`Level` that
advances one turn per :meth:`Level.step`.
"""

from dataclasses import dataclass
from typing import Literal, Set, Tuple

import structlog

from roguegrid.entities.registry import EntityRegistry
from roguegrid.settings import WorldSettings
from roguegrid.systems.movement import try_move
from roguegrid.utils.game_rng import GameRNG
from roguegrid.world.caves import generate_caves
from roguegrid.world.grid import Grid
from roguegrid.world.rooms import generate_rooms
from roguegrid.world.validation import is_playable, largest_open_region
from roguegrid.world.visibility import VisibilityTracker

log = structlog.get_logger()

LevelKind = Literal["rooms", "caves"]
LEVEL_KINDS: Tuple[str, ...] = ("rooms", "caves")

PLAYER_GLYPH = "@"
PLAYER_NAME = "player"


class LevelGenerationError(RuntimeError):
    """Raised when every generation attempt produced an unusable level."""


@dataclass
class Level:
    kind: str
    seed: int
    grid: Grid
    entities: EntityRegistry
    player_id: int
    tracker: VisibilityTracker
    turn: int = 0

    @property
    def player_position(self) -> Tuple[int, int]:
        pos = self.entities.get_position(self.player_id)
        if pos is None:
            raise LookupError(f"Player entity {self.player_id} is not active")
        return pos.x, pos.y

    def refresh_visibility(self) -> Set[Tuple[int, int]]:
        return self.tracker.update(self.grid, self.player_position)

    def step(self, dx: int, dy: int) -> Set[Tuple[int, int]]:
        """Advance one turn: try to move the player, then update visibility.

        Returns the cells explored for the first time this turn.
        """
        moved = try_move(self.entities, self.player_id, dx, dy, self.grid)
        self.turn += 1
        newly_explored = self.refresh_visibility()
        log.debug(
            "Turn finished",
            turn=self.turn,
            moved=moved,
            pos=self.player_position,
            newly_explored=len(newly_explored),
        )
        return newly_explored


def pick_start_position(
    grid: Grid, entities: EntityRegistry, rng: GameRNG
) -> Tuple[int, int] | None:
    """Uniformly pick an unoccupied cell in the grid's largest open region."""
    occupied = entities.blocking_positions()
    candidates = sorted(largest_open_region(grid) - occupied)
    if not candidates:
        return None
    return rng.choice(candidates)


def _generate_once(
    kind: str,
    width: int,
    height: int,
    rng: GameRNG,
    settings: WorldSettings,
) -> Tuple[Grid, EntityRegistry, Tuple[int, int]] | None:
    entities = EntityRegistry()
    if kind == "rooms":
        grid, start = generate_rooms(
            width, height, entities, rng, settings.rooms, settings.monsters
        )
        if not is_playable(grid, settings.min_open_tiles, start=start):
            return None
    else:
        grid = generate_caves(
            width, height, entities, rng, settings.caves, settings.monsters
        )
        if not is_playable(grid, settings.min_open_tiles):
            return None
        start = pick_start_position(grid, entities, rng)
        if start is None:
            return None
    return grid, entities, start


def build_level(
    kind: LevelKind = "rooms",
    width: int | None = None,
    height: int | None = None,
    rng: GameRNG | None = None,
    settings: WorldSettings | None = None,
) -> Level:
    """Generate a playable level, retrying with fresh seeds on degenerate output."""
    if kind not in LEVEL_KINDS:
        raise ValueError(f"Unknown level kind {kind!r}; expected one of {LEVEL_KINDS}")
    settings = settings or WorldSettings()
    width = width if width is not None else settings.map_width
    height = height if height is not None else settings.map_height
    rng = rng or GameRNG()

    for attempt in range(1, settings.max_generation_retries + 1):
        seed = rng.spawn_child_seed()
        result = _generate_once(kind, width, height, GameRNG(seed), settings)
        if result is None:
            log.warning(
                "Degenerate level, retrying",
                kind=kind,
                attempt=attempt,
                max_attempts=settings.max_generation_retries,
                seed=seed,
            )
            continue

        grid, entities, start = result
        player_id = entities.create_entity(
            x=start[0],
            y=start[1],
            glyph=PLAYER_GLYPH,
            name=PLAYER_NAME,
            blocks_movement=True,
            is_alive=True,
        )
        tracker = VisibilityTracker(
            width,
            height,
            radius=settings.visibility.radius,
            light_walls=settings.visibility.light_walls,
        )
        level = Level(kind, seed, grid, entities, player_id, tracker)
        level.refresh_visibility()
        log.info(
            "Level ready",
            kind=kind,
            seed=seed,
            attempt=attempt,
            start=start,
            monsters=len(entities) - 1,
        )
        return level

    log.error(
        "Level generation failed",
        kind=kind,
        width=width,
        height=height,
        attempts=settings.max_generation_retries,
    )
    raise LevelGenerationError(
        f"No playable {kind} level after {settings.max_generation_retries} attempts"
    )
