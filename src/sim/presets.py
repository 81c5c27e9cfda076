"""
Market pattern presets.

Each preset pairs a pattern with a volatility, strength and duration
that make the shape visible on a 1s chart. Apply with:

    simulator.update_config(preset_overrides("HEAD_AND_SHOULDERS"))
"""

from dataclasses import dataclass
from typing import Any, Dict

from .types import PatternType


@dataclass(frozen=True)
class PatternPreset:
    """Named bundle of pattern settings."""
    name: str
    pattern_type: PatternType
    volatility: float
    pattern_strength: float
    pattern_duration_ms: int
    description: str

    def overrides(self) -> Dict[str, Any]:
        """Partial config for SimulationConfig.merged / update_config."""
        return {
            "pattern_type": self.pattern_type,
            "volatility": self.volatility,
            "pattern_strength": self.pattern_strength,
            "pattern_duration_ms": self.pattern_duration_ms,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "patternType": self.pattern_type.value,
            "volatility": self.volatility,
            "patternStrength": self.pattern_strength,
            "patternDuration": self.pattern_duration_ms,
            "description": self.description,
        }


PATTERN_PRESETS: Dict[str, PatternPreset] = {
    preset.name: preset
    for preset in (
        PatternPreset("UPTREND", PatternType.UPTREND, 0.0005, 0.6, 60_000,
                      "Steady upward price movement"),
        PatternPreset("DOWNTREND", PatternType.DOWNTREND, 0.0005, 0.6, 60_000,
                      "Steady downward price movement"),
        PatternPreset("VOLATILE", PatternType.VOLATILE, 0.002, 0.8, 45_000,
                      "High volatility with large price swings"),
        PatternPreset("SIDEWAYS", PatternType.SIDEWAYS, 0.0003, 0.7, 60_000,
                      "Sideways consolidation with low volatility"),
        PatternPreset("BREAKOUT_UP", PatternType.BREAKOUT_UP, 0.0008, 0.9, 45_000,
                      "Consolidation followed by upward breakout"),
        PatternPreset("BREAKOUT_DOWN", PatternType.BREAKOUT_DOWN, 0.0008, 0.9, 45_000,
                      "Consolidation followed by downward breakdown"),
        PatternPreset("HEAD_AND_SHOULDERS", PatternType.HEAD_AND_SHOULDERS, 0.0006, 0.8, 90_000,
                      "Classic head and shoulders reversal pattern"),
        PatternPreset("DOUBLE_TOP", PatternType.DOUBLE_TOP, 0.0006, 0.8, 75_000,
                      "Double top reversal pattern"),
        PatternPreset("DOUBLE_BOTTOM", PatternType.DOUBLE_BOTTOM, 0.0006, 0.8, 75_000,
                      "Double bottom reversal pattern"),
    )
}


def get_preset(name: str) -> PatternPreset:
    """
    Look up a preset by name (case-insensitive).

    Raises:
        KeyError: If no preset has this name
    """
    key = name.strip().upper()
    if key not in PATTERN_PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(PATTERN_PRESETS)}")
    return PATTERN_PRESETS[key]


def preset_overrides(name: str) -> Dict[str, Any]:
    return get_preset(name).overrides()
