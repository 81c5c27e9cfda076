"""
Configuration API endpoints.

Partial updates are merged and validated by the simulator; the body is
taken as a raw mapping so non-numeric values are rejected rather than
coerced.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from ...sim import InvalidConfigError, MarketSimulator
from ..deps import get_simulator
from ..models import ConfigResponse

router = APIRouter(prefix="/config", tags=["config"])


@router.get("", response_model=ConfigResponse)
def get_config(simulator: MarketSimulator = Depends(get_simulator)) -> ConfigResponse:
    """Get the applied simulation configuration."""
    return ConfigResponse.model_validate(simulator.get_config().to_dict())


@router.post("", response_model=ConfigResponse)
def update_config(
    partial: dict[str, Any] = Body(..., description="Fields to override (camelCase or snake_case)"),
    simulator: MarketSimulator = Depends(get_simulator),
) -> ConfigResponse:
    """
    Merge a partial configuration update.

    Returns 422 with the list of problems if any field is invalid;
    the previous configuration stays in effect.
    """
    try:
        applied = simulator.update_config(partial)
    except InvalidConfigError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    return ConfigResponse.model_validate(applied.to_dict())
