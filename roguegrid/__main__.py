# roguegrid/__main__.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import numpy as np
import structlog
import yaml

from roguegrid.level import LEVEL_KINDS, PLAYER_NAME, LevelGenerationError, build_level
from roguegrid.settings import load_settings
from roguegrid.utils.game_rng import GameRNG
from roguegrid.utils.logging_utils import setup_logging
from roguegrid.world.tiles import TileKind

log = structlog.get_logger()

DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0), (-1, -1), (1, -1), (-1, 1), (1, 1))


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="roguegrid", description="Generate a level and report what was built"
    )
    parser.add_argument("--kind", choices=LEVEL_KINDS, default="rooms")
    parser.add_argument("--seed", type=int, default=None, help="Master seed")
    parser.add_argument(
        "--config", type=Path, default=None, help="Worldgen YAML (packaged defaults if omitted)"
    )
    parser.add_argument(
        "--walk", type=int, default=0, help="Random player steps to take after generation"
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, json_output=args.json)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        log.critical("Could not load settings", error=str(e))
        return 2

    rng = GameRNG(seed=args.seed)
    log.info("Using master seed", seed=rng.initial_seed)
    try:
        level = build_level(args.kind, rng=rng, settings=settings)
    except LevelGenerationError as e:
        log.critical("Generation failed", error=str(e))
        return 1

    for _ in range(args.walk):
        dx, dy = rng.choice(DIRECTIONS)
        level.step(dx, dy)

    grid = level.grid
    log.info(
        "Level summary",
        kind=level.kind,
        seed=level.seed,
        size=(grid.width, grid.height),
        floor_tiles=grid.count(TileKind.FLOOR),
        explored_tiles=int(np.count_nonzero(grid.explored)),
        monsters={
            name: n
            for name, n in level.entities.count_by_name().items()
            if name != PLAYER_NAME
        },
        player=level.player_position,
        turns=level.turn,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
