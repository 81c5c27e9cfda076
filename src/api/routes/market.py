"""
Market data API endpoints.

Provides the latest snapshot, candle series and engine stats.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from ...sim import MarketSimulator, SimulationRunner
from ...sim.constants import CANDLE_INTERVALS_MS, MAX_CANDLES_PER_INTERVAL, MAX_CANDLES_IN_SNAPSHOT
from ..deps import get_runner, get_simulator
from ..models import CandleModel, CandlesResponse, MarketDataResponse, StatsResponse

router = APIRouter(tags=["market"])


@router.get("/market-data", response_model=MarketDataResponse)
def get_market_data(simulator: MarketSimulator = Depends(get_simulator)) -> MarketDataResponse:
    """
    Get the latest market data snapshot.

    Ticks once if the simulator has not produced a snapshot yet.
    """
    snapshot = simulator.last_snapshot()
    if snapshot is None:
        snapshot = simulator.tick()
    return MarketDataResponse.model_validate(snapshot.to_dict())


@router.get("/candles", response_model=CandlesResponse)
def get_candles(
    interval: int | None = Query(None, description="Bucket size in ms (selected interval if omitted)"),
    limit: int = Query(MAX_CANDLES_IN_SNAPSHOT, ge=1, le=MAX_CANDLES_PER_INTERVAL),
    simulator: MarketSimulator = Depends(get_simulator),
) -> CandlesResponse:
    """Get candles for any maintained bucket size, oldest first."""
    interval = interval or simulator.get_config().candle_interval_ms
    if interval not in CANDLE_INTERVALS_MS:
        raise HTTPException(
            status_code=404,
            detail=f"Candle interval {interval}ms not available. Use one of {list(CANDLE_INTERVALS_MS)}",
        )

    candles = simulator.candles(interval, limit)
    return CandlesResponse(
        interval=interval,
        candles=[CandleModel.model_validate(c.to_dict()) for c in candles],
        total=len(candles),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    simulator: MarketSimulator = Depends(get_simulator),
    runner: SimulationRunner = Depends(get_runner),
) -> StatsResponse:
    """Engine counters and runner state."""
    return StatsResponse(**simulator.stats().to_dict(), runner_running=runner.is_running)
