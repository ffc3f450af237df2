from __future__ import annotations

"""Seedable random number generator shared by every generation routine.

All layout and spawn decisions draw from a :class:`GameRNG` passed in by the
caller, so a level is fully reproducible from its seed.  The generator wraps
:func:`numpy.random.default_rng` and exposes the small helper surface the
world generators need.
"""

import random
from typing import Any, Dict, Optional, Sequence

import numpy as np


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)
        self.weighted_choice_cache: Dict[Any, np.ndarray] = {}

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the closed range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        return a + (b - a) * float(self.rng.random())

    def coin_flip(self, heads_probability: float = 0.5) -> str:
        if not 0.0 <= heads_probability <= 1.0:
            raise ValueError("probability out of range")
        return "heads" if self.get_float() < heads_probability else "tails"

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a random element from *seq*."""
        if not seq:
            raise ValueError("seq empty")
        return seq[self.get_int(0, len(seq) - 1)]

    def random_mask(self, shape: tuple[int, int], probability: float) -> np.ndarray:
        """Boolean array where each cell is ``True`` with ``probability``."""
        if not 0.0 <= probability <= 1.0:
            raise ValueError("probability out of range")
        return self.rng.random(shape) < probability

    # ------------------------------------------------------------------
    # weighted helpers
    # ------------------------------------------------------------------
    def weighted_choice(
        self,
        items: Sequence[Any],
        weights: Sequence[float],
        cache_key: Any | None = None,
    ) -> Any:
        if len(items) != len(weights):
            raise ValueError("items/weights length mismatch")
        if not items:
            raise ValueError("items empty")
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("weight sum must be positive")

        cdf = None
        if cache_key is not None:
            cdf = self.weighted_choice_cache.get(cache_key)
        if cdf is None:
            cdf = np.cumsum(np.asarray(weights, dtype=float))
            cdf[-1] = total
            if cache_key is not None:
                self.weighted_choice_cache[cache_key] = cdf

        r = self.get_float(0.0, total)
        idx = int(np.searchsorted(cdf, r, side="right"))
        idx = min(idx, len(items) - 1)
        return items[idx]

    # ------------------------------------------------------------------
    # state management
    # ------------------------------------------------------------------
    def spawn_child_seed(self) -> int:
        """Draw a fresh seed for an independent, reproducible sub-generator."""
        return int(self.rng.integers(0, 2**32 - 1))

    def get_state(self) -> Dict[str, Any]:
        return {
            "random_state": self.rng.bit_generator.state,
            "initial_seed": self.initial_seed,
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        if "random_state" in state:
            self.rng.bit_generator.state = state["random_state"]
        if "initial_seed" in state:
            self.initial_seed = state["initial_seed"]

    def reset(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)
        self.weighted_choice_cache.clear()


__all__ = ["GameRNG"]
