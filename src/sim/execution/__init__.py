"""
Trade execution for the market simulator.
"""

from .trade_executor import TradeExecutor, TradeExecutorConfig

__all__ = [
    "TradeExecutor",
    "TradeExecutorConfig",
]
