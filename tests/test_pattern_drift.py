"""
Tests for the pattern drift model.

Validates that:
1. No pattern (or random_walk) contributes no drift
2. Trend patterns add +/- the strength unit
3. Breakouts mean-revert before 70% progress and push afterwards
4. Phased patterns follow their phase tables
5. Only a change of pattern type restarts the pattern
6. Progress is clamped to [0, 1] and the terminal phase persists
"""

import pytest

from src.sim import PatternType, RandomSource
from src.sim.pricing import PatternDriftModel
from src.sim.pricing.pattern_drift import DOUBLE_TOP_PHASES, phase_multiplier


def make_model(pattern_type=None, strength=0.5, duration_ms=10_000, base_price=1.0):
    return PatternDriftModel(
        start_ms=0.0,
        base_price=base_price,
        pattern_type=pattern_type,
        strength=strength,
        duration_ms=duration_ms,
        random_source=RandomSource(seed=5),
    )


class TestTrendPatterns:
    """Test constant-drift patterns."""

    def test_no_pattern_zero(self):
        """No configured pattern adds nothing."""
        assert make_model(None).drift_contribution(1000, 1.0) == 0.0

    def test_random_walk_zero(self):
        """random_walk is equivalent to no pattern."""
        model = make_model(PatternType.RANDOM_WALK)
        assert not model.is_active
        assert model.drift_contribution(1000, 1.0) == 0.0

    def test_uptrend(self):
        """Uptrend adds strength * 0.01."""
        assert make_model(PatternType.UPTREND, strength=0.6).drift_contribution(1000, 1.0) == pytest.approx(0.006)

    def test_downtrend(self):
        """Downtrend subtracts strength * 0.01."""
        assert make_model(PatternType.DOWNTREND).drift_contribution(1000, 1.0) == pytest.approx(-0.005)

    def test_sideways_pulls_to_base(self):
        """Sideways drift is proportional to the distance from the base price."""
        model = make_model(PatternType.SIDEWAYS, base_price=1.0)
        assert model.drift_contribution(1000, 1.2) < 0
        assert model.drift_contribution(1000, 0.8) > 0
        assert model.drift_contribution(1000, 1.0) == 0.0

    def test_volatile_is_random_and_scaled(self):
        """Volatile drift is a normal draw times three strength units."""
        model = make_model(PatternType.VOLATILE, strength=1.0)
        values = [model.drift_contribution(1000, 1.0) for _ in range(200)]
        assert len(set(values)) > 1
        assert any(v > 0 for v in values) and any(v < 0 for v in values)


class TestBreakouts:
    """Test breakout phases."""

    def test_mean_reversion_before_breakout(self):
        """Before 70% progress the drift is (base - price) * 0.01."""
        model = make_model(PatternType.BREAKOUT_UP, base_price=1.0)
        assert model.drift_contribution(5_000, 1.1) == pytest.approx(-0.001)

    def test_breakout_up_push(self):
        """From 70% progress breakout_up pushes with three strength units."""
        model = make_model(PatternType.BREAKOUT_UP, strength=0.5)
        assert model.drift_contribution(7_000, 1.0) == pytest.approx(0.015)

    def test_breakout_down_push(self):
        """breakout_down pushes the other way."""
        model = make_model(PatternType.BREAKOUT_DOWN, strength=0.5)
        assert model.drift_contribution(9_000, 1.0) == pytest.approx(-0.015)


class TestPhasedPatterns:
    """Test table-driven patterns."""

    @pytest.mark.parametrize("elapsed_ms, expected", [
        (1_000, 1.0),    # left shoulder
        (2_700, -1.0),   # pullback
        (4_000, 1.5),    # head
        (5_200, -1.5),   # pullback from head
        (6_000, 1.0),    # right shoulder
        (9_000, -2.0),   # breakdown
    ])
    def test_head_and_shoulders(self, elapsed_ms, expected):
        """Each phase applies its multiple of the strength unit."""
        model = make_model(PatternType.HEAD_AND_SHOULDERS, strength=1.0)
        assert model.drift_contribution(elapsed_ms, 1.0) == pytest.approx(expected * 0.01)

    def test_double_bottom_mirrors_double_top(self):
        """Double bottom drift is the negation of double top at every progress."""
        top = make_model(PatternType.DOUBLE_TOP)
        bottom = make_model(PatternType.DOUBLE_BOTTOM)
        for t in (500, 3_500, 5_000, 8_000):
            assert bottom.drift_contribution(t, 1.0) == pytest.approx(-top.drift_contribution(t, 1.0))

    def test_phase_multiplier_terminal(self):
        """Progress 1.0 lands in the terminal phase."""
        assert phase_multiplier(DOUBLE_TOP_PHASES, 1.0) == -2.0


class TestProgressAndReset:
    """Test progress tracking and restarts."""

    def test_progress_clamped(self):
        """Progress never leaves [0, 1]."""
        model = make_model(PatternType.UPTREND)
        assert model.update_progress(-5_000) == 0.0
        assert model.update_progress(50_000) == 1.0

    def test_terminal_phase_persists_after_duration(self):
        """After the duration the final phase keeps applying."""
        model = make_model(PatternType.DOUBLE_TOP, strength=1.0)
        assert model.drift_contribution(1_000_000, 1.0) == pytest.approx(-0.02)

    def test_type_change_resets(self):
        """Switching pattern type restarts from the current price and time."""
        model = make_model(PatternType.UPTREND)
        assert model.apply_config(PatternType.DOWNTREND, 0.5, 10_000, now_ms=4_000, current_price=1.3)
        assert model.state.pattern_start_ms == 4_000
        assert model.state.base_price == 1.3
        assert model.state.progress == 0.0

    def test_same_type_keeps_state(self):
        """Re-sending the same type only updates strength and duration."""
        model = make_model(PatternType.UPTREND)
        model.update_progress(5_000)
        assert not model.apply_config(PatternType.UPTREND, 0.9, 20_000, now_ms=5_000, current_price=2.0)
        assert model.state.pattern_start_ms == 0.0
        assert model.state.base_price == 1.0
        assert model.strength == 0.9
        assert model.duration_ms == 20_000
