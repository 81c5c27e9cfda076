"""
Random number source for the simulator.

Standard normal samples come from the Box-Muller transform on two
uniform draws. Uniform draws of exactly 0 are redrawn so log(0) can
never occur.

Every component takes a RandomSource, so a seeded instance makes a
whole simulator reproducible in tests:

    source = RandomSource(seed=42)
"""

import math
from typing import Optional

import numpy as np


class RandomSource:
    """Uniform, integer and normal samples backed by a numpy Generator."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        """
        Args:
            seed: Seed for a fresh generator (ignored when rng is given)
            rng: Existing generator to draw from
        """
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def uniform(self) -> float:
        """Uniform sample in (0, 1)."""
        u = 0.0
        while u == 0.0:
            u = float(self._rng.random())
        return u

    def normal(self) -> float:
        """Standard normal sample (Box-Muller)."""
        u = self.uniform()
        v = self.uniform()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def integers(self, low: int, high: int) -> int:
        """Integer sample in [low, high)."""
        return int(self._rng.integers(low, high))
