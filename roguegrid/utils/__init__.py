from roguegrid.utils.game_rng import GameRNG
from roguegrid.utils.logging_utils import setup_logging

__all__ = ["GameRNG", "setup_logging"]
