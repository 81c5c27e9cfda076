"""
Rate limiter for simulated trade requests.
Enforces a minimum spacing between accepted requests (1000 / max_per_second ms).

This is a logical throttle: it never sleeps. Callers pass their own clock
so the limiter behaves identically under a real or a simulated clock.
"""

from __future__ import annotations

import threading


class IntervalRateLimiter:
    """
    Minimum-interval rate limiter.

    Features:
    - Configurable max requests per second
    - Thread-safe
    - Check and record can be split so that a request rejected later in
      validation does not consume the slot
    """

    def __init__(self, max_per_second: float):
        """
        Initialize rate limiter.

        Args:
            max_per_second: Maximum accepted requests per second (> 0)
        """
        self._lock = threading.Lock()
        self._last_ms: float | None = None
        self._min_interval_ms = 0.0
        self.set_rate(max_per_second)

    def set_rate(self, max_per_second: float) -> None:
        """Change the allowed rate. The last accepted timestamp is kept."""
        if max_per_second <= 0:
            raise ValueError(f"max_per_second must be > 0, got {max_per_second}")
        with self._lock:
            self.max_per_second = max_per_second
            self._min_interval_ms = 1000.0 / max_per_second

    @property
    def min_interval_ms(self) -> float:
        return self._min_interval_ms

    @property
    def last_acquired_ms(self) -> float | None:
        """Timestamp of the last accepted request (None before the first)."""
        with self._lock:
            return self._last_ms

    def is_allowed(self, now_ms: float) -> bool:
        """
        Check whether a request at now_ms would be accepted.

        Does not consume the slot; call record() once the request succeeds.
        """
        with self._lock:
            if self._last_ms is None:
                return True
            return now_ms - self._last_ms >= self._min_interval_ms

    def record(self, now_ms: float) -> None:
        """Mark a request as accepted at now_ms."""
        with self._lock:
            self._last_ms = now_ms

    def try_acquire(self, now_ms: float) -> bool:
        """
        Check and record in one step.

        Returns:
            True if accepted, False if rate limited
        """
        with self._lock:
            if self._last_ms is not None and now_ms - self._last_ms < self._min_interval_ms:
                return False
            self._last_ms = now_ms
            return True

    def wait_time(self, now_ms: float) -> float:
        """
        Get milliseconds until the next request would be accepted.

        Returns:
            0.0 if a request is allowed now
        """
        with self._lock:
            if self._last_ms is None:
                return 0.0
            return max(0.0, self._last_ms + self._min_interval_ms - now_ms)

    def reset(self):
        """Forget the last accepted request."""
        with self._lock:
            self._last_ms = None
