"""
Pydantic models for the simulator API.
"""

from .market_data import (
    OrderBookLevelModel,
    OrderBookModel,
    CandleModel,
    TradeModel,
    MarketDataResponse,
    CandlesResponse,
    TradeRequest,
    TradeResponse,
    ConfigResponse,
    PresetModel,
    StatsResponse,
)

__all__ = [
    "OrderBookLevelModel",
    "OrderBookModel",
    "CandleModel",
    "TradeModel",
    "MarketDataResponse",
    "CandlesResponse",
    "TradeRequest",
    "TradeResponse",
    "ConfigResponse",
    "PresetModel",
    "StatsResponse",
]
