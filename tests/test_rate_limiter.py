"""
Tests for IntervalRateLimiter.
"""

import pytest

from src.utils.rate_limiter import IntervalRateLimiter


class TestIntervalRateLimiter:
    """Test minimum-interval throttling."""

    def test_first_request_allowed(self):
        """Nothing has been accepted yet, so any time is allowed."""
        limiter = IntervalRateLimiter(2)
        assert limiter.is_allowed(0)
        assert limiter.last_acquired_ms is None

    def test_interval(self):
        """max 2/s means 500ms between accepted requests."""
        limiter = IntervalRateLimiter(2)
        assert limiter.min_interval_ms == 500
        assert limiter.try_acquire(0)
        assert not limiter.try_acquire(499)
        assert limiter.try_acquire(500)

    def test_is_allowed_does_not_consume(self):
        """Checking leaves the last accepted timestamp untouched."""
        limiter = IntervalRateLimiter(10)
        limiter.record(1000)
        assert not limiter.is_allowed(1050)
        assert limiter.is_allowed(1100)
        assert limiter.last_acquired_ms == 1000

    def test_wait_time(self):
        limiter = IntervalRateLimiter(2)
        assert limiter.wait_time(0) == 0.0
        limiter.record(0)
        assert limiter.wait_time(100) == pytest.approx(400)
        assert limiter.wait_time(900) == 0.0

    def test_set_rate_keeps_last(self):
        """Changing the rate keeps the last accepted timestamp."""
        limiter = IntervalRateLimiter(1)
        limiter.record(0)
        limiter.set_rate(10)
        assert limiter.last_acquired_ms == 0
        assert limiter.is_allowed(100)

    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            IntervalRateLimiter(0)

    def test_reset(self):
        limiter = IntervalRateLimiter(1)
        limiter.record(0)
        limiter.reset()
        assert limiter.is_allowed(1)
