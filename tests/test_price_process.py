"""
Tests for the GBM price process.

Validates that:
1. Zero volatility and zero drift keep the price constant
2. Price never drops below the floor
3. dt is clamped at 0 for out-of-order timestamps
4. Drift moves the price deterministically when volatility is 0
5. Extreme-volatility branches are selected at the right thresholds
"""

import math

import pytest

from src.sim import RandomSource
from src.sim.constants import MIN_PRICE
from src.sim.pricing import PriceProcess


def make_process(price=1.1, volatility=0.0001, start_ms=0.0, seed=11):
    return PriceProcess(price, volatility, start_ms, RandomSource(seed=seed))


class TestPriceStep:
    """Test single-step behaviour."""

    def test_zero_volatility_no_drift_is_flat(self):
        """With sigma=0 and no pattern the price never moves."""
        process = make_process(volatility=0.0)
        for i in range(1, 50):
            assert process.step(i * 10.0) == pytest.approx(1.1)

    def test_step_records_timestamp(self):
        """step() stores the tick time as the last update."""
        process = make_process()
        process.step(250.0)
        assert process.state.last_update_ms == 250.0

    def test_negative_elapsed_is_clamped(self):
        """A timestamp earlier than the last update gives dt = 0."""
        process = make_process(start_ms=1000.0)
        assert process.elapsed_seconds(500.0) == 0.0
        assert process.elapsed_seconds(1500.0) == pytest.approx(0.5)

    def test_zero_dt_keeps_price(self):
        """dt = 0 means exp(0) = 1, whatever the random draw."""
        process = make_process(volatility=0.5)
        assert process.advance(0.0, volatility_multiplier=3.0) == pytest.approx(1.1)

    def test_pattern_drift_applies_exactly(self):
        """With sigma=0 the step is exp(drift * dt)."""
        process = make_process(volatility=0.0)
        new_price = process.advance(2.0, pattern_drift=0.005)
        assert new_price == pytest.approx(1.1 * math.exp(0.01))

    def test_price_floor(self):
        """A huge negative drift clamps at MIN_PRICE and stays positive."""
        process = make_process(volatility=0.0)
        new_price = process.advance(10.0, pattern_drift=-1000.0)
        assert new_price == MIN_PRICE
        assert new_price > 0

    def test_price_stays_positive_under_heavy_noise(self):
        """Many high-volatility, boosted steps never produce a non-positive price."""
        process = make_process(volatility=1.0, seed=2)
        for i in range(1, 500):
            assert process.step(i * 1000.0, volatility_multiplier=5.0) > 0

    def test_overflowing_step_keeps_price(self):
        """A step whose exponent overflows keeps the previous price and records the time."""
        process = make_process(volatility=0.0)
        new_price = process.advance(80_000.0, pattern_drift=0.01, now_ms=80_000_000.0)
        assert new_price == pytest.approx(1.1)
        assert process.state.last_update_ms == 80_000_000.0

    def test_step_after_overflow_recovers(self):
        """The tick following an overflowing step advances normally."""
        process = make_process(volatility=0.0)
        process.step(80_000_000.0, pattern_drift=0.01)
        assert process.step(80_001_000.0, pattern_drift=0.01) == pytest.approx(1.1 * math.exp(0.01))

    def test_reset(self):
        """reset() restarts from the given price and time."""
        process = make_process()
        process.step(1000.0)
        process.reset(2.5, 5000.0)
        assert process.price == 2.5
        assert process.state.last_update_ms == 5000.0


class TestVolatilityBranches:
    """Test the extreme-volatility special cases."""

    def test_base_drift_zero_for_normal_volatility(self):
        """Volatility at or below 0.05 adds no base drift."""
        assert make_process(volatility=0.05).base_drift() == 0.0

    def test_base_drift_random_above_threshold(self):
        """Volatility above 0.05 draws a random base drift."""
        process = make_process(volatility=0.06)
        drifts = {process.base_drift() for _ in range(5)}
        assert any(d != 0.0 for d in drifts)

    def test_random_factor(self):
        """Volatility above 0.1 widens the random component by 1.5."""
        assert make_process(volatility=0.1).random_factor() == 1.0
        assert make_process(volatility=0.11).random_factor() == 1.5
