"""POST /api/v1/evaluate and /api/v1/paths — stateless timeline queries."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from paradesim.api.dependencies import get_config
from paradesim.api.schemas import (
    EvaluateRequest,
    FrameResponse,
    PathSegmentSchema,
    PathsRequest,
    PathsResponse,
)
from paradesim.config import EngineConfig
from paradesim.engine.path_trace import trace_all
from paradesim.engine.timeline import evaluate
from paradesim.systems.digest import frame_digest

router = APIRouter()


@router.post("/evaluate", response_model=FrameResponse)
def evaluate_frame(
    body: EvaluateRequest,
    config: EngineConfig = Depends(get_config),
) -> FrameResponse:
    snapshot = evaluate(body.state.to_domain(), body.time, config.duration_epsilon)
    return FrameResponse.from_snapshot(body.time, snapshot, frame_digest(snapshot))


@router.post("/paths", response_model=PathsResponse)
def trace_paths(
    body: PathsRequest,
    config: EngineConfig = Depends(get_config),
) -> PathsResponse:
    traces = trace_all(body.state.to_domain(), body.samples, config.duration_epsilon)
    return PathsResponse(paths={
        owner_id: [PathSegmentSchema.model_validate(seg.to_dict()) for seg in segments]
        for owner_id, segments in traces.items()
    })
