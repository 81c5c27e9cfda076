"""
Price process: Geometric Brownian Motion.

One step of the recurrence:

    drift            = base_drift(volatility) + pattern_drift
    random_component = N(0,1) * sqrt(dt) * random_factor * volatility_multiplier
    price           *= exp(drift * dt + volatility * random_component)

base_drift is 0 unless volatility > 0.05, where it adds 0.01 * N(0,1).
random_factor is 1.5 when volatility > 0.1, else 1.0.

dt is wall-clock seconds since the previous step, so scheduling jitter
only changes the variance of a step, never its expected scale.
"""

import math
from typing import Optional

from ..constants import (
    EXTREME_VOLATILITY,
    HIGH_VOLATILITY,
    HIGH_VOLATILITY_RANDOM_FACTOR,
    MIN_PRICE,
)
from ..random_source import RandomSource
from ..types import PriceState


class PriceProcess:
    """Owns PriceState and advances it once per tick."""

    def __init__(
        self,
        initial_price: float,
        volatility: float,
        start_ms: float,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Args:
            initial_price: Starting price (> 0)
            volatility: Sigma of the process
            start_ms: Timestamp of the initial price
            random_source: Source of normal samples
        """
        self.volatility = volatility
        self._random = random_source or RandomSource()
        self.state = PriceState(
            current_price=max(initial_price, MIN_PRICE),
            last_update_ms=start_ms,
        )

    @property
    def price(self) -> float:
        return self.state.current_price

    def elapsed_seconds(self, now_ms: float) -> float:
        """Seconds since the last update, never negative."""
        return max(0.0, now_ms - self.state.last_update_ms) / 1000.0

    def base_drift(self) -> float:
        """Random directional bias, only present for extreme volatility."""
        if self.volatility > EXTREME_VOLATILITY:
            return 0.01 * self._random.normal()
        return 0.0

    def random_factor(self) -> float:
        if self.volatility > HIGH_VOLATILITY:
            return HIGH_VOLATILITY_RANDOM_FACTOR
        return 1.0

    def advance(
        self,
        dt_seconds: float,
        volatility_multiplier: float = 1.0,
        pattern_drift: float = 0.0,
        now_ms: Optional[float] = None,
    ) -> float:
        """
        Advance the price by one step.

        Args:
            dt_seconds: Elapsed time since the previous step
            volatility_multiplier: Amplitude boost for this step (>= 1)
            pattern_drift: Extra drift from the active pattern
            now_ms: Timestamp recorded as the last update (unchanged if None)

        Returns:
            New price, floor-clamped to MIN_PRICE
        """
        dt_seconds = max(0.0, dt_seconds)
        drift = self.base_drift() + pattern_drift
        random_component = (
            self._random.normal()
            * math.sqrt(dt_seconds)
            * self.random_factor()
            * volatility_multiplier
        )
        price_change = drift * dt_seconds + self.volatility * random_component

        try:
            new_price = self.state.current_price * math.exp(price_change)
        except OverflowError:
            new_price = math.inf
        # Out-of-range steps (e.g. after a long idle gap) keep the previous price
        if not math.isfinite(new_price):
            new_price = self.state.current_price
        self.state.current_price = max(new_price, MIN_PRICE)
        if now_ms is not None:
            self.state.last_update_ms = now_ms
        return self.state.current_price

    def step(self, now_ms: float, volatility_multiplier: float = 1.0, pattern_drift: float = 0.0) -> float:
        """Advance using the wall-clock time elapsed since the last update."""
        return self.advance(
            self.elapsed_seconds(now_ms),
            volatility_multiplier=volatility_multiplier,
            pattern_drift=pattern_drift,
            now_ms=now_ms,
        )

    def reset(self, price: float, now_ms: float) -> None:
        self.state = PriceState(current_price=max(price, MIN_PRICE), last_update_ms=now_ms)
