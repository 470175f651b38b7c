"""Pydantic request/response models for the REST API.

Field aliases follow the saved parade JSON (camelCase), so a client can post
exactly what the editor stores. Conversion into core models goes through the
same ``from_dict`` path used for files, which is where payload defaults are
applied.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from paradesim.core.enums import ActionType, TerrainType
from paradesim.core.parade import ParadeState
from paradesim.core.snapshot import Snapshot


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- Parade state (input and output) ---

class PointSchema(BaseModel):
    x: float
    y: float


class ActionPayloadSchema(_CamelModel):
    target_x: float | None = Field(None, alias="targetX")
    target_y: float | None = Field(None, alias="targetY")
    move_path_mode: str | None = Field(None, alias="movePathMode")
    orthogonal_order: str | None = Field(None, alias="orthogonalOrder")
    waypoint: PointSchema | None = None
    group_anchor: str | None = Field(None, alias="groupAnchor")
    target_rotation: float | None = Field(None, alias="targetRotation")
    wheel_angle: float | None = Field(None, alias="wheelAngle")
    pivot_corner: str | None = Field(None, alias="pivotCorner")


class ActionSchema(_CamelModel):
    id: str
    type: ActionType
    start_time: float = Field(0.0, alias="startTime")
    duration: float = 0.0
    payload: ActionPayloadSchema = Field(default_factory=ActionPayloadSchema)


class TrackSchema(_CamelModel):
    owner_id: str | None = Field(None, alias="ownerId")
    actions: list[ActionSchema] = Field(default_factory=list)


class AnimationSchema(_CamelModel):
    duration: float = 60.0
    tracks: dict[str, TrackSchema] = Field(default_factory=dict)
    track_order: list[str] = Field(default_factory=list, alias="trackOrder")


class EntitySchema(_CamelModel):
    id: str
    type: str
    label: str = ""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    group_id: str | None = Field(None, alias="groupId")
    config: dict[str, Any] | None = None


class GroupSchema(_CamelModel):
    id: str | None = None
    label: str = ""
    rotation: float = 0.0
    show_label: bool = Field(True, alias="showLabel")
    type: str | None = None
    config: dict[str, Any] | None = None


class ParadeConfigSchema(_CamelModel):
    id: str | None = None
    title: str = "Untitled Parade"
    width: float = 100.0
    height: float = 60.0
    terrain: TerrainType = TerrainType.ASPHALT
    last_modified: int = Field(0, alias="lastModified")


class ParadeStateSchema(_CamelModel):
    config: ParadeConfigSchema | None = None
    entities: list[EntitySchema] = Field(default_factory=list)
    groups: dict[str, GroupSchema] = Field(default_factory=dict)
    animation: AnimationSchema = Field(default_factory=AnimationSchema)

    def to_domain(self) -> ParadeState:
        return ParadeState.from_dict(self.model_dump(by_alias=True, exclude_none=True))

    @classmethod
    def from_domain(cls, state: ParadeState) -> ParadeStateSchema:
        return cls.model_validate(state.to_dict())


# --- Evaluation ---

class EvaluateRequest(BaseModel):
    state: ParadeStateSchema
    time: float = Field(0.0, ge=0.0, description="Timeline time in seconds")


class FrameResponse(BaseModel):
    time: float
    digest: str
    entities: list[EntitySchema]
    groups: dict[str, GroupSchema]

    @classmethod
    def from_snapshot(cls, time: float, snapshot: Snapshot, digest: str) -> FrameResponse:
        return cls.model_validate({"time": time, "digest": digest, **snapshot.to_dict()})


# --- Paths ---

class PathsRequest(BaseModel):
    state: ParadeStateSchema
    samples: int = Field(16, ge=1, le=256, description="Points per MOVE / WHEEL action")


class PathSegmentSchema(_CamelModel):
    owner_id: str = Field(alias="ownerId")
    action_id: str = Field(alias="actionId")
    type: ActionType
    points: list[PointSchema]
    end: PointSchema
    pivot: PointSchema | None = None


class PathsResponse(BaseModel):
    paths: dict[str, list[PathSegmentSchema]]


# --- Playback ---

class PlaybackStatus(BaseModel):
    loaded: bool
    running: bool
    playing: bool
    finished: bool
    time: float
    duration: float


class PlaybackResponse(BaseModel):
    status: PlaybackStatus
    frame: FrameResponse | None = None


class ControlResponse(BaseModel):
    status: str
    message: str
    time: float = 0.0


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    time: float


# --- Saved parades ---

class ParadeSummary(_CamelModel):
    id: str
    title: str
    last_modified: int = Field(alias="lastModified")
    entity_count: int = Field(alias="entityCount")
    track_count: int = Field(alias="trackCount")


# --- Config ---

class EngineConfigResponse(BaseModel):
    duration_epsilon: float
    frame_rate: float
    playback_speed: float
    trace_samples: int
    max_save_slots: int


# --- Editing ---

class AddActionRequest(_CamelModel):
    state: ParadeStateSchema
    owner_id: str = Field(alias="ownerId")
    type: ActionType
    time: float = Field(0.0, ge=0.0, description="Requested start; moved past any overlapping action")
    duration: float = Field(2.0, gt=0.0)


class RetimeActionRequest(_CamelModel):
    state: ParadeStateSchema
    start_time: float | None = Field(None, ge=0.0, alias="startTime")
    duration: float | None = Field(None, gt=0.0)


class RemoveActionRequest(BaseModel):
    state: ParadeStateSchema


class EditResponse(_CamelModel):
    state: ParadeStateSchema
    action_id: str | None = Field(None, alias="actionId")
    timeline_end: float = Field(alias="timelineEnd")
