"""GET /api/v1/config — expose engine configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from paradesim.api.dependencies import get_config
from paradesim.api.schemas import EngineConfigResponse
from paradesim.config import EngineConfig

router = APIRouter()


@router.get("/config", response_model=EngineConfigResponse)
def read_config(config: EngineConfig = Depends(get_config)) -> EngineConfigResponse:
    return EngineConfigResponse(
        duration_epsilon=config.duration_epsilon,
        frame_rate=config.frame_rate,
        playback_speed=config.playback_speed,
        trace_samples=config.trace_samples,
        max_save_slots=config.max_save_slots,
    )
