"""
Simulation configuration.

SimulationConfig is an immutable snapshot. Updates never mutate it in
place: merged() validates the overlay and returns a brand new instance,
so the engine can swap its config reference atomically.

Only the dataclass fields are mutable through an update (explicit
whitelist). Keys are accepted in snake_case or in the camelCase wire
format used by the UI (e.g. "initialPrice", "priceChangeThreshold15s").
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from .constants import (
    AMPLITUDE_THRESHOLD_MAX_PCT,
    CANDLE_INTERVALS_MS,
    DEFAULT_PATTERN_DURATION_MS,
    DEFAULT_PATTERN_STRENGTH,
    ORDER_BOOK_MAX_LEVELS,
)
from .errors import InvalidConfigError
from .types import PatternType


# snake_case field -> camelCase wire key
WIRE_KEYS: Dict[str, str] = {
    "initial_price": "initialPrice",
    "volatility": "volatility",
    "spread": "spread",
    "update_interval_ms": "updateInterval",
    "order_book_levels": "orderBookLevels",
    "max_trade_size": "maxTradeSize",
    "max_trades_per_second": "maxTradesPerSecond",
    "trade_size_step": "tradeSizeStep",
    "candle_interval_ms": "candleInterval",
    "amplitude_threshold_15s": "priceChangeThreshold15s",
    "amplitude_threshold_1m": "priceChangeThreshold1m",
    "amplitude_threshold_15m": "priceChangeThreshold15m",
    "amplitude_threshold_1h": "priceChangeThreshold1h",
    "pattern_type": "patternType",
    "pattern_strength": "patternStrength",
    "pattern_duration_ms": "patternDuration",
}
FIELD_FOR_WIRE_KEY: Dict[str, str] = {wire: name for name, wire in WIRE_KEYS.items()}

_INT_FIELDS = ("order_book_levels", "candle_interval_ms")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Simulator parameters.

    Defaults describe a EUR/USD-like instrument
    at 1.1 with a 1 pip spread, ticking every 10ms.
    """
    initial_price: float = 1.1
    volatility: float = 0.0001
    spread: float = 0.0001
    update_interval_ms: float = 10
    order_book_levels: int = 5
    max_trade_size: float = 1.0
    max_trades_per_second: float = 10
    trade_size_step: float = 0.1
    candle_interval_ms: int = 1000

    # Target swing (percent) per lookback window, 0 disables the window
    amplitude_threshold_15s: float = 3.0
    amplitude_threshold_1m: float = 5.0
    amplitude_threshold_15m: float = 5.0
    amplitude_threshold_1h: float = 5.0

    pattern_type: Optional[PatternType] = None
    pattern_strength: float = DEFAULT_PATTERN_STRENGTH
    pattern_duration_ms: float = DEFAULT_PATTERN_DURATION_MS

    def __post_init__(self):
        """Normalize and validate every field."""
        errors = self._collect_errors()
        if errors:
            raise InvalidConfigError(errors)

    def _collect_errors(self) -> List[str]:
        errors: List[str] = []

        for f in fields(self):
            if f.name == "pattern_type":
                continue
            value = getattr(self, f.name)
            if not _is_number(value):
                errors.append(f"{f.name} must be a finite number, got {value!r}")
        if errors:
            return errors

        for name in _INT_FIELDS:
            value = getattr(self, name)
            if float(value).is_integer():
                object.__setattr__(self, name, int(value))
            else:
                errors.append(f"{name} must be an integer, got {value!r}")

        if self.pattern_type is not None and not isinstance(self.pattern_type, PatternType):
            try:
                object.__setattr__(self, "pattern_type", PatternType(self.pattern_type))
            except ValueError:
                valid = ", ".join(p.value for p in PatternType)
                errors.append(f"pattern_type must be one of [{valid}], got {self.pattern_type!r}")

        if self.initial_price <= 0:
            errors.append(f"initial_price must be > 0, got {self.initial_price}")
        if not 0 <= self.volatility <= 1:
            errors.append(f"volatility must be within [0, 1], got {self.volatility}")
        if self.spread <= 0:
            errors.append(f"spread must be > 0, got {self.spread}")
        if self.update_interval_ms < 1:
            errors.append(f"update_interval_ms must be >= 1, got {self.update_interval_ms}")
        if not 1 <= self.order_book_levels <= ORDER_BOOK_MAX_LEVELS:
            errors.append(
                f"order_book_levels must be within [1, {ORDER_BOOK_MAX_LEVELS}], "
                f"got {self.order_book_levels}"
            )
        if self.max_trade_size <= 0:
            errors.append(f"max_trade_size must be > 0, got {self.max_trade_size}")
        if self.max_trades_per_second <= 0:
            errors.append(f"max_trades_per_second must be > 0, got {self.max_trades_per_second}")
        if not 0 < self.trade_size_step <= self.max_trade_size:
            errors.append(
                f"trade_size_step must be within (0, max_trade_size], got {self.trade_size_step}"
            )
        if self.candle_interval_ms not in CANDLE_INTERVALS_MS:
            errors.append(
                f"candle_interval_ms must be one of {list(CANDLE_INTERVALS_MS)}, "
                f"got {self.candle_interval_ms}"
            )
        for window, upper in AMPLITUDE_THRESHOLD_MAX_PCT.items():
            value = getattr(self, f"amplitude_threshold_{window}")
            if not 0 <= value <= upper:
                errors.append(
                    f"amplitude_threshold_{window} must be within [0, {upper:g}], got {value}"
                )
        if not 0 <= self.pattern_strength <= 1:
            errors.append(f"pattern_strength must be within [0, 1], got {self.pattern_strength}")
        if self.pattern_duration_ms <= 0:
            errors.append(f"pattern_duration_ms must be > 0, got {self.pattern_duration_ms}")

        return errors

    # ─────────────────────────────────────────────────────────────────────────
    # Derived views
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def amplitude_thresholds(self) -> Dict[str, float]:
        """Target swing percent keyed by window ("15s", "1m", "15m", "1h")."""
        return {
            window: getattr(self, f"amplitude_threshold_{window}")
            for window in AMPLITUDE_THRESHOLD_MAX_PCT
        }

    @property
    def min_trade_interval_ms(self) -> float:
        return 1000.0 / self.max_trades_per_second

    # ─────────────────────────────────────────────────────────────────────────
    # Updates
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Build a config from defaults overlaid with data."""
        return cls().merged(data)

    def merged(self, partial: Mapping[str, Any]) -> "SimulationConfig":
        """
        Return a new config with partial applied on top of this one.

        Args:
            partial: Field overrides (snake_case or camelCase keys)

        Returns:
            New validated SimulationConfig

        Raises:
            InvalidConfigError: Unknown key or invalid value. self is unchanged.
        """
        changes = normalize_keys(partial)
        return replace(self, **changes)

    def diff(self, other: "SimulationConfig") -> Dict[str, Any]:
        """Fields whose value differs in other, with other's values."""
        return {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if getattr(self, f.name) != getattr(other, f.name)
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase wire keys."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, PatternType):
                value = value.value
            data[WIRE_KEYS[f.name]] = value
        return data


def normalize_keys(partial: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Map wire keys to field names and reject anything outside the whitelist.

    Raises:
        InvalidConfigError: If a key is not a configurable field
    """
    changes: Dict[str, Any] = {}
    unknown: List[str] = []
    for key, value in partial.items():
        if key in WIRE_KEYS:
            changes[key] = value
        elif key in FIELD_FOR_WIRE_KEY:
            changes[FIELD_FOR_WIRE_KEY[key]] = value
        else:
            unknown.append(key)
    if unknown:
        raise InvalidConfigError([f"unknown config field '{key}'" for key in unknown])
    return changes
