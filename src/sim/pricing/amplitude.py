"""
Amplitude controller.

Keeps one AmplitudeTracker per lookback window (15s, 1m, 15m, 1h) and
turns a shortfall against the window's target swing into a volatility
multiplier for the next price step.

Per window, with target T (percent) and observed amplitude A:

    elapsed = clamp((now - window_start) / window, 0, 1)
    if elapsed > 0.6 and A < T:
        candidate = max(1, 1 + ((T - A) / T) * (elapsed - 0.6) * 5)

The tick multiplier is the max candidate across windows (1 if none).
Boosting only in the last 40% of a window and scaling with the
remaining shortfall avoids single-tick jumps.

A tracker restarts from the current price as soon as its window has
elapsed, whether or not the target was met. A missed window is not
carried over. A target of 0 disables the window.
"""

from typing import Dict, Mapping, Optional

from ..constants import AMPLITUDE_BOOST_GAIN, AMPLITUDE_BOOST_START, AMPLITUDE_WINDOWS_MS
from ..types import AmplitudeTracker


class AmplitudeController:
    """Owns the per-window trackers."""

    def __init__(self, windows_ms: Optional[Mapping[str, int]] = None):
        self.windows_ms: Dict[str, int] = dict(windows_ms or AMPLITUDE_WINDOWS_MS)
        self.trackers: Dict[str, AmplitudeTracker] = {}
        self.last_multipliers: Dict[str, float] = {window: 1.0 for window in self.windows_ms}

    def reset(self) -> None:
        self.trackers.clear()
        self.last_multipliers = {window: 1.0 for window in self.windows_ms}

    @staticmethod
    def window_multiplier(tracker: AmplitudeTracker, window_ms: int, threshold_pct: float, now_ms: float) -> float:
        """Boost candidate for one window (1.0 when not triggered)."""
        if threshold_pct <= 0:
            return 1.0
        elapsed = (now_ms - tracker.window_start_ms) / window_ms
        elapsed = min(1.0, max(0.0, elapsed))
        amplitude = tracker.amplitude_pct
        if elapsed <= AMPLITUDE_BOOST_START or amplitude >= threshold_pct:
            return 1.0
        shortfall = (threshold_pct - amplitude) / threshold_pct
        boost = 1.0 + shortfall * (elapsed - AMPLITUDE_BOOST_START) * AMPLITUDE_BOOST_GAIN
        return max(1.0, boost)

    def volatility_multiplier(
        self,
        now_ms: float,
        current_price: float,
        thresholds_pct: Mapping[str, float],
    ) -> float:
        """
        Observe the current price and return this tick's volatility multiplier.

        Args:
            now_ms: Tick timestamp
            current_price: Price before this tick's step
            thresholds_pct: Target swing per window key; missing keys count as 0

        Returns:
            Multiplier >= 1.0
        """
        overall = 1.0
        for window, window_ms in self.windows_ms.items():
            tracker = self.trackers.get(window)
            if tracker is None:
                tracker = AmplitudeTracker.starting_at(now_ms, current_price)
                self.trackers[window] = tracker

            tracker.observe(current_price)
            candidate = self.window_multiplier(
                tracker, window_ms, thresholds_pct.get(window, 0.0), now_ms
            )
            self.last_multipliers[window] = candidate
            overall = max(overall, candidate)

            if now_ms - tracker.window_start_ms >= window_ms:
                self.trackers[window] = AmplitudeTracker.starting_at(now_ms, current_price)

        return overall

    def to_dict(self) -> Dict[str, Dict]:
        return {
            window: {
                **tracker.to_dict(),
                "multiplier": self.last_multipliers.get(window, 1.0),
            }
            for window, tracker in self.trackers.items()
        }
