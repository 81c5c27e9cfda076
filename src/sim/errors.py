"""
Simulator exceptions.

Trade rejections (rate limit, size) are returned as TradeResult values,
not raised. Configuration problems are raised so the caller keeps the
previous configuration.
"""

from typing import Iterable, List


class SimulationError(Exception):
    """Base class for simulator errors."""


class InvalidConfigError(SimulationError):
    """Raised when a configuration update has a non-numeric or out-of-range field."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("Invalid configuration: " + "; ".join(self.errors))
