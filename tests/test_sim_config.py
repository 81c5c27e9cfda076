"""
Tests for SimulationConfig validation and merging.

Validates that:
1. Defaults are valid and match the documented values
2. Every invalid field is reported in one InvalidConfigError
3. merged() accepts camelCase or snake_case keys and never mutates self
4. Unknown keys, bools and non-numeric strings are rejected
"""

import dataclasses

import pytest

from src.sim import InvalidConfigError, PatternType, SimulationConfig


class TestDefaults:
    """Test the default configuration."""

    def test_defaults(self):
        config = SimulationConfig()
        assert config.initial_price == 1.1
        assert config.volatility == 0.0001
        assert config.spread == 0.0001
        assert config.update_interval_ms == 10
        assert config.order_book_levels == 5
        assert config.max_trade_size == 1.0
        assert config.max_trades_per_second == 10
        assert config.candle_interval_ms == 1000
        assert config.pattern_type is None
        assert config.amplitude_thresholds == {"15s": 3.0, "1m": 5.0, "15m": 5.0, "1h": 5.0}

    def test_frozen(self):
        """Configs are immutable snapshots."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            SimulationConfig().volatility = 0.5

    def test_min_trade_interval(self):
        assert SimulationConfig(max_trades_per_second=4).min_trade_interval_ms == 250


class TestValidation:
    """Test range and type checks."""

    @pytest.mark.parametrize("field, value", [
        ("initial_price", 0),
        ("volatility", -0.1),
        ("volatility", 1.5),
        ("spread", 0),
        ("update_interval_ms", 0.5),
        ("order_book_levels", 0),
        ("order_book_levels", 51),
        ("max_trade_size", -1),
        ("max_trades_per_second", 0),
        ("candle_interval_ms", 60_000),
        ("amplitude_threshold_15s", 21),
        ("amplitude_threshold_1m", 31),
        ("amplitude_threshold_15m", 46),
        ("amplitude_threshold_1h", 101),
        ("pattern_strength", 1.5),
        ("pattern_duration_ms", 0),
    ])
    def test_out_of_range(self, field, value):
        with pytest.raises(InvalidConfigError) as exc_info:
            SimulationConfig(**{field: value})
        assert any(field in msg for msg in exc_info.value.errors)

    def test_collects_all_errors(self):
        """Every problem is listed, not only the first."""
        with pytest.raises(InvalidConfigError) as exc_info:
            SimulationConfig(initial_price=-1, spread=0, volatility=2)
        assert len(exc_info.value.errors) == 3

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidConfigError, match="finite number"):
            SimulationConfig(volatility="abc")

    def test_bool_rejected(self):
        with pytest.raises(InvalidConfigError):
            SimulationConfig(spread=True)

    def test_nan_rejected(self):
        with pytest.raises(InvalidConfigError):
            SimulationConfig(initial_price=float("nan"))

    def test_trade_size_step_bounded_by_max(self):
        with pytest.raises(InvalidConfigError, match="trade_size_step"):
            SimulationConfig(max_trade_size=1.0, trade_size_step=2.0)

    def test_integer_fields_coerced(self):
        """Whole floats are accepted for integer fields."""
        config = SimulationConfig(order_book_levels=7.0, candle_interval_ms=100.0)
        assert config.order_book_levels == 7
        assert isinstance(config.order_book_levels, int)

    def test_fractional_levels_rejected(self):
        with pytest.raises(InvalidConfigError, match="integer"):
            SimulationConfig(order_book_levels=2.5)

    def test_pattern_type_coerced(self):
        assert SimulationConfig(pattern_type="double_top").pattern_type == PatternType.DOUBLE_TOP

    def test_unknown_pattern_type(self):
        with pytest.raises(InvalidConfigError, match="pattern_type"):
            SimulationConfig(pattern_type="cup_and_handle")


class TestMerge:
    """Test partial updates."""

    def test_camel_case_keys(self):
        config = SimulationConfig().merged({"volatility": 0.002, "priceChangeThreshold15s": 10, "patternType": "uptrend"})
        assert config.volatility == 0.002
        assert config.amplitude_threshold_15s == 10
        assert config.pattern_type == PatternType.UPTREND

    def test_snake_case_keys(self):
        config = SimulationConfig().merged({"update_interval_ms": 50})
        assert config.update_interval_ms == 50

    def test_merge_does_not_mutate(self):
        base = SimulationConfig()
        base.merged({"volatility": 0.5})
        assert base.volatility == 0.0001

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidConfigError, match="unknown config field 'leverage'"):
            SimulationConfig().merged({"leverage": 10})

    def test_string_number_rejected(self):
        """Numeric fields do not coerce strings."""
        with pytest.raises(InvalidConfigError):
            SimulationConfig().merged({"volatility": "0.01"})

    def test_diff(self):
        base = SimulationConfig()
        assert base.diff(base.merged({"spread": 0.0002})) == {"spread": 0.0002}

    def test_to_dict_wire_keys(self):
        data = SimulationConfig(pattern_type="sideways").to_dict()
        assert data["initialPrice"] == 1.1
        assert data["updateInterval"] == 10
        assert data["candleInterval"] == 1000
        assert data["patternType"] == "sideways"
        assert data["patternDuration"] == 30_000

    def test_from_dict_round_trip(self):
        """A serialized config loads back unchanged."""
        config = SimulationConfig(volatility=0.003, pattern_type="volatile")
        assert SimulationConfig.from_dict(config.to_dict()) == config
