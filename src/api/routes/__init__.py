"""
Simulator API routes.

All endpoints are mounted under /api prefix.
"""

from .market import router as market_router
from .config import router as config_router
from .trades import router as trades_router
from .presets import router as presets_router

__all__ = [
    "market_router",
    "config_router",
    "trades_router",
    "presets_router",
]
