"""Core data models and parade representation."""

from paradesim.core.actions import (
    ACTION_DEFAULTS,
    AnimationAction,
    AnimationState,
    AnimationTrack,
    MoveAction,
    TurnAction,
    WheelAction,
    action_to_dict,
    parse_action,
)
from paradesim.core.enums import (
    ActionType,
    AnchorCode,
    EntityType,
    MovePathMode,
    OrthogonalOrder,
    PivotCorner,
    TerrainType,
)
from paradesim.core.models import Entity, GroupConfig, GroupMetadata, Point, Pose
from paradesim.core.parade import ParadeConfig, ParadeState
from paradesim.core.snapshot import Snapshot

__all__ = [
    "ACTION_DEFAULTS",
    "ActionType",
    "AnchorCode",
    "AnimationAction",
    "AnimationState",
    "AnimationTrack",
    "Entity",
    "EntityType",
    "GroupConfig",
    "GroupMetadata",
    "MoveAction",
    "MovePathMode",
    "OrthogonalOrder",
    "ParadeConfig",
    "ParadeState",
    "PivotCorner",
    "Point",
    "Pose",
    "Snapshot",
    "TerrainType",
    "TurnAction",
    "WheelAction",
    "action_to_dict",
    "parse_action",
]
