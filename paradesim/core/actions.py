"""Animation actions as a tagged union, plus tracks and the animation state.

Every payload default lives in :data:`ACTION_DEFAULTS` and is applied once,
in :func:`parse_action`, when a record enters the engine. Target fields that
are missing or non-finite are stored as ``None``, meaning "stay at the value
the owner has when the action starts". Only the evaluator knows that value.
The action classes repeat the non-finite cleanup in ``__post_init__`` so that
actions built in code follow the same rules as parsed ones.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, TypeVar, Union

from paradesim.core.enums import ActionType, AnchorCode, MovePathMode, OrthogonalOrder, PivotCorner
from paradesim.core.errors import InvalidActionError
from paradesim.core.models import Point, finite_or, optional_finite

_E = TypeVar("_E", bound=Enum)

ACTION_DEFAULTS: Mapping[ActionType, Mapping[str, Any]] = MappingProxyType({
    ActionType.MOVE: MappingProxyType({
        "path_mode": MovePathMode.ORTHOGONAL,
        "orthogonal_order": OrthogonalOrder.X_THEN_Y,
        "group_anchor": AnchorCode.TL,
    }),
    ActionType.TURN: MappingProxyType({}),
    ActionType.WHEEL: MappingProxyType({
        "wheel_angle": 90.0,
        "pivot_corner": PivotCorner.TL,
    }),
})


def _clean_timing(action: Any) -> None:
    object.__setattr__(action, "start_time", finite_or(action.start_time, 0.0))
    object.__setattr__(action, "duration", finite_or(action.duration, 0.0))


@dataclass(frozen=True, slots=True)
class MoveAction:
    """Translate the owner towards an absolute target point."""

    type: ClassVar[ActionType] = ActionType.MOVE

    id: str
    start_time: float
    duration: float
    target_x: float | None = None
    target_y: float | None = None
    path_mode: MovePathMode = ACTION_DEFAULTS[ActionType.MOVE]["path_mode"]
    orthogonal_order: OrthogonalOrder = ACTION_DEFAULTS[ActionType.MOVE]["orthogonal_order"]
    waypoint: Point | None = None
    group_anchor: AnchorCode = ACTION_DEFAULTS[ActionType.MOVE]["group_anchor"]

    def __post_init__(self) -> None:
        _clean_timing(self)
        object.__setattr__(self, "target_x", optional_finite(self.target_x))
        object.__setattr__(self, "target_y", optional_finite(self.target_y))
        if self.waypoint is not None and not (math.isfinite(self.waypoint.x) and math.isfinite(self.waypoint.y)):
            object.__setattr__(self, "waypoint", None)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def target_from(self, start: Point) -> Point:
        """Absolute target, with missing axes held at *start*."""
        return Point(
            self.target_x if self.target_x is not None else start.x,
            self.target_y if self.target_y is not None else start.y,
        )


@dataclass(frozen=True, slots=True)
class TurnAction:
    """Change heading towards an absolute rotation (not normalised)."""

    type: ClassVar[ActionType] = ActionType.TURN

    id: str
    start_time: float
    duration: float
    target_rotation: float | None = None

    def __post_init__(self) -> None:
        _clean_timing(self)
        object.__setattr__(self, "target_rotation", optional_finite(self.target_rotation))

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


@dataclass(frozen=True, slots=True)
class WheelAction:
    """Pivot a formation about a corner or its centre."""

    type: ClassVar[ActionType] = ActionType.WHEEL

    id: str
    start_time: float
    duration: float
    wheel_angle: float = ACTION_DEFAULTS[ActionType.WHEEL]["wheel_angle"]
    pivot_corner: PivotCorner = ACTION_DEFAULTS[ActionType.WHEEL]["pivot_corner"]

    def __post_init__(self) -> None:
        _clean_timing(self)
        object.__setattr__(
            self, "wheel_angle", finite_or(self.wheel_angle, ACTION_DEFAULTS[ActionType.WHEEL]["wheel_angle"])
        )

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


AnimationAction = Union[MoveAction, TurnAction, WheelAction]


def _enum_or(enum_cls: type[_E], value: Any, default: _E) -> _E:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _parse_waypoint(raw: Any) -> Point | None:
    if not isinstance(raw, Mapping):
        return None
    x = optional_finite(raw.get("x"))
    y = optional_finite(raw.get("y"))
    if x is None or y is None:
        return None
    return Point(x, y)


def parse_action(raw: Mapping[str, Any]) -> AnimationAction:
    """Build a typed action from the saved JSON shape.

    ``{"id", "type", "startTime", "duration", "payload": {...}}``
    """
    try:
        action_type = ActionType(raw["type"])
        action_id = str(raw["id"])
    except (KeyError, ValueError) as exc:
        raise InvalidActionError(f"Malformed action record: {exc}") from exc

    start_time = finite_or(raw.get("startTime"), 0.0)
    duration = finite_or(raw.get("duration"), 0.0)
    payload = raw.get("payload") or {}
    defaults = ACTION_DEFAULTS[action_type]

    match action_type:
        case ActionType.MOVE:
            return MoveAction(
                id=action_id,
                start_time=start_time,
                duration=duration,
                target_x=optional_finite(payload.get("targetX")),
                target_y=optional_finite(payload.get("targetY")),
                path_mode=_enum_or(MovePathMode, payload.get("movePathMode"), defaults["path_mode"]),
                orthogonal_order=_enum_or(
                    OrthogonalOrder, payload.get("orthogonalOrder"), defaults["orthogonal_order"]
                ),
                waypoint=_parse_waypoint(payload.get("waypoint")),
                group_anchor=_enum_or(AnchorCode, payload.get("groupAnchor"), defaults["group_anchor"]),
            )
        case ActionType.TURN:
            return TurnAction(
                id=action_id,
                start_time=start_time,
                duration=duration,
                target_rotation=optional_finite(payload.get("targetRotation")),
            )
        case ActionType.WHEEL:
            return WheelAction(
                id=action_id,
                start_time=start_time,
                duration=duration,
                wheel_angle=finite_or(payload.get("wheelAngle"), defaults["wheel_angle"]),
                pivot_corner=_enum_or(PivotCorner, payload.get("pivotCorner"), defaults["pivot_corner"]),
            )


def action_to_dict(action: AnimationAction) -> dict[str, Any]:
    """Inverse of :func:`parse_action` (``None`` targets are omitted)."""
    payload: dict[str, Any] = {}
    if isinstance(action, MoveAction):
        if action.target_x is not None:
            payload["targetX"] = action.target_x
        if action.target_y is not None:
            payload["targetY"] = action.target_y
        payload["movePathMode"] = action.path_mode.value
        payload["orthogonalOrder"] = action.orthogonal_order.value
        payload["groupAnchor"] = action.group_anchor.value
        if action.waypoint is not None:
            payload["waypoint"] = {"x": action.waypoint.x, "y": action.waypoint.y}
    elif isinstance(action, TurnAction):
        if action.target_rotation is not None:
            payload["targetRotation"] = action.target_rotation
    else:
        payload["wheelAngle"] = action.wheel_angle
        payload["pivotCorner"] = action.pivot_corner.value
    return {
        "id": action.id,
        "type": action.type.value,
        "startTime": action.start_time,
        "duration": action.duration,
        "payload": payload,
    }


@dataclass(frozen=True, slots=True)
class AnimationTrack:
    """All actions of one owner (entity id or group id). Unordered on disk."""

    owner_id: str
    actions: tuple[AnimationAction, ...] = ()

    @classmethod
    def from_dict(cls, owner_id: str, raw: Mapping[str, Any]) -> AnimationTrack:
        return cls(
            owner_id=str(raw.get("ownerId", owner_id)),
            actions=tuple(parse_action(a) for a in raw.get("actions") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"ownerId": self.owner_id, "actions": [action_to_dict(a) for a in self.actions]}


@dataclass(slots=True)
class AnimationState:
    """Timeline length plus every owner's track."""

    duration: float = 60.0
    tracks: dict[str, AnimationTrack] = field(default_factory=dict)
    track_order: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> AnimationState:
        if not raw:
            return cls()
        tracks = {
            str(owner): AnimationTrack.from_dict(str(owner), track)
            for owner, track in (raw.get("tracks") or {}).items()
        }
        return cls(
            duration=finite_or(raw.get("duration"), 60.0),
            tracks=tracks,
            track_order=[str(o) for o in raw.get("trackOrder") or ()],
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "duration": self.duration,
            "tracks": {owner: t.to_dict() for owner, t in self.tracks.items()},
        }
        if self.track_order:
            out["trackOrder"] = list(self.track_order)
        return out
