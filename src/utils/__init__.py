"""
Utility modules.
"""

from .logger import get_logger, setup_logger, SimLogger
from .rate_limiter import IntervalRateLimiter

__all__ = [
    # Logger
    "get_logger",
    "setup_logger",
    "SimLogger",
    # Rate limiting
    "IntervalRateLimiter",
]
