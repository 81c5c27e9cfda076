"""
Pattern preset API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from ...sim import PATTERN_PRESETS, MarketSimulator
from ..deps import get_simulator
from ..models import ConfigResponse, PresetModel

router = APIRouter(prefix="/presets", tags=["presets"])


@router.get("", response_model=list[PresetModel])
def list_presets() -> list[PresetModel]:
    """List available pattern presets."""
    return [PresetModel.model_validate(p.to_dict()) for p in PATTERN_PRESETS.values()]


@router.post("/{name}", response_model=ConfigResponse)
def apply_preset(name: str, simulator: MarketSimulator = Depends(get_simulator)) -> ConfigResponse:
    """Apply a preset's pattern settings, restart its pattern and return the applied config."""
    try:
        applied = simulator.apply_preset(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Preset {name} not found")
    return ConfigResponse.model_validate(applied.to_dict())
