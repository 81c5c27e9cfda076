"""
CLI modules for the market simulator.

This package contains:
- display: rich tables and panels for run summaries, candles and presets
"""

from .display import (
    console,
    print_error,
    print_config,
    print_run_summary,
    print_candles,
    print_presets,
)

__all__ = [
    "console",
    "print_error",
    "print_config",
    "print_run_summary",
    "print_candles",
    "print_presets",
]
