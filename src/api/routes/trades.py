"""
Trades API endpoints.

Executes simulated market trades and lists the trade log.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from ...sim import MarketSimulator, TradeRejection
from ...sim.constants import MAX_TRADES
from ..deps import get_simulator
from ..models import TradeModel, TradeRequest, TradeResponse

router = APIRouter(prefix="/trades", tags=["trades"])

REJECTION_STATUS = {
    TradeRejection.RATE_LIMITED: 429,
    TradeRejection.SIZE_EXCEEDED: 422,
}


@router.post("", response_model=TradeResponse)
def execute_trade(
    request: TradeRequest,
    simulator: MarketSimulator = Depends(get_simulator),
) -> TradeResponse:
    """
    Execute a trade at the current simulated price.

    Rate-limited requests return 429, oversize requests 422.
    """
    result = simulator.execute_trade(request.side, request.size)
    if not result.success:
        raise HTTPException(
            status_code=REJECTION_STATUS[result.rejection],
            detail=result.to_dict(),
        )
    return TradeResponse.model_validate(result.to_dict())


@router.get("", response_model=list[TradeModel])
def list_trades(
    limit: int = Query(MAX_TRADES, ge=1, le=MAX_TRADES),
    simulator: MarketSimulator = Depends(get_simulator),
) -> list[TradeModel]:
    """Recent trades, newest first."""
    return [TradeModel.model_validate(t.to_dict()) for t in simulator.trades(limit)]
