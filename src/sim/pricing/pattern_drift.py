"""
Pattern drift model.

Adds a deterministic (or, for "volatile", random) bias to the price
drift so the random walk traces a recognizable chart shape over the
pattern duration.

Progress = clamp((now - pattern_start) / duration, 0, 1). Once progress
reaches 1 the terminal phase keeps applying until the pattern type is
changed; expiry does not revert to a plain random walk.

The strength unit is pattern_strength * 0.01.
"""

import math
from typing import Optional, Sequence, Tuple

from ..constants import DEFAULT_PATTERN_DURATION_MS, DEFAULT_PATTERN_STRENGTH
from ..random_source import RandomSource
from ..types import PatternState, PatternType

# (progress upper bound, multiple of the strength unit)
Phases = Sequence[Tuple[float, float]]

HEAD_AND_SHOULDERS_PHASES: Phases = (
    (0.25, 1.0),       # left shoulder up
    (0.30, -1.0),      # pullback
    (0.50, 1.5),       # head
    (0.55, -1.5),      # pullback from head
    (0.75, 1.0),       # right shoulder
    (math.inf, -2.0),  # breakdown
)

DOUBLE_TOP_PHASES: Phases = (
    (0.3, 1.0),
    (0.4, -1.0),
    (0.7, 1.0),
    (math.inf, -2.0),
)

DOUBLE_BOTTOM_PHASES: Phases = tuple((bound, -mult) for bound, mult in DOUBLE_TOP_PHASES)

PHASED_PATTERNS = {
    PatternType.HEAD_AND_SHOULDERS: HEAD_AND_SHOULDERS_PHASES,
    PatternType.DOUBLE_TOP: DOUBLE_TOP_PHASES,
    PatternType.DOUBLE_BOTTOM: DOUBLE_BOTTOM_PHASES,
}

BREAKOUT_START = 0.7
BREAKOUT_MEAN_REVERSION = 0.01


def phase_multiplier(phases: Phases, progress: float) -> float:
    for upper, multiplier in phases:
        if progress < upper:
            return multiplier
    return phases[-1][1]


class PatternDriftModel:
    """Owns PatternState for the configured pattern."""

    def __init__(
        self,
        start_ms: float,
        base_price: float,
        pattern_type: Optional[PatternType] = None,
        strength: float = DEFAULT_PATTERN_STRENGTH,
        duration_ms: float = DEFAULT_PATTERN_DURATION_MS,
        random_source: Optional[RandomSource] = None,
    ):
        self.pattern_type = pattern_type
        self.strength = strength
        self.duration_ms = duration_ms
        self._random = random_source or RandomSource()
        self.state = PatternState(pattern_start_ms=start_ms, base_price=base_price)

    @property
    def is_active(self) -> bool:
        return self.pattern_type not in (None, PatternType.RANDOM_WALK)

    def apply_config(
        self,
        pattern_type: Optional[PatternType],
        strength: float,
        duration_ms: float,
        now_ms: float,
        current_price: float,
    ) -> bool:
        """
        Adopt new pattern settings.

        Only a change of pattern type restarts the pattern.

        Returns:
            True if the pattern state was reset
        """
        changed = pattern_type != self.pattern_type
        self.pattern_type = pattern_type
        self.strength = strength
        self.duration_ms = duration_ms
        if changed:
            self.reset(now_ms, current_price)
        return changed

    def reset(self, now_ms: float, current_price: float) -> None:
        self.state = PatternState(pattern_start_ms=now_ms, base_price=current_price, progress=0.0)

    def update_progress(self, now_ms: float) -> float:
        duration = self.duration_ms or DEFAULT_PATTERN_DURATION_MS
        progress = (now_ms - self.state.pattern_start_ms) / duration
        self.state.progress = min(1.0, max(0.0, progress))
        return self.state.progress

    def drift_contribution(self, now_ms: float, current_price: float) -> float:
        """
        Drift to add to the price process for this tick.

        Returns:
            0.0 when no pattern (or random_walk) is configured
        """
        if not self.is_active:
            return 0.0

        progress = self.update_progress(now_ms)
        unit = self.strength * 0.01
        base_price = self.state.base_price
        pattern = self.pattern_type

        if pattern == PatternType.UPTREND:
            return unit
        if pattern == PatternType.DOWNTREND:
            return -unit
        if pattern == PatternType.VOLATILE:
            return self._random.normal() * unit * 3
        if pattern == PatternType.SIDEWAYS:
            return (base_price - current_price) * 0.01 * unit
        if pattern in (PatternType.BREAKOUT_UP, PatternType.BREAKOUT_DOWN):
            if progress < BREAKOUT_START:
                return (base_price - current_price) * BREAKOUT_MEAN_REVERSION
            direction = 1.0 if pattern == PatternType.BREAKOUT_UP else -1.0
            return direction * unit * 3
        if pattern in PHASED_PATTERNS:
            return unit * phase_multiplier(PHASED_PATTERNS[pattern], progress)
        return 0.0
