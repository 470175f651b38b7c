"""Path trace for the overlay renderer.

Each MOVE or WHEEL action becomes a polyline of the owner's reference point.
The points come from sampling :func:`evaluate` itself, so the drawn trace and
the simulated playback cannot disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from paradesim.core.actions import AnimationAction, MoveAction, WheelAction
from paradesim.core.enums import AnchorCode
from paradesim.core.models import Point
from paradesim.core.parade import ParadeState
from paradesim.core.snapshot import Snapshot
from paradesim.engine.schedule import DEFAULT_EPSILON, sort_actions
from paradesim.engine.timeline import evaluate
from paradesim.systems.anchor import resolve_anchor, resolve_pivot

DEFAULT_SAMPLES = 16


@dataclass(frozen=True, slots=True)
class PathSegment:
    owner_id: str
    action_id: str
    action_type: str
    points: tuple[Point, ...]
    pivot: Point | None = None

    @property
    def end(self) -> Point:
        """Drag handle position: where the owner arrives."""
        return self.points[-1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ownerId": self.owner_id,
            "actionId": self.action_id,
            "type": self.action_type,
            "points": [{"x": p.x, "y": p.y} for p in self.points],
            "end": {"x": self.end.x, "y": self.end.y},
            "pivot": {"x": self.pivot.x, "y": self.pivot.y} if self.pivot else None,
        }


def _reference(frame: Snapshot, state: ParadeState, owner_id: str, anchor: AnchorCode) -> Point | None:
    if owner_id in state.groups:
        members = [e.point for e in frame.entities if e.group_id == owner_id]
        return resolve_anchor(members, anchor) if members else None
    entity = frame.entity(owner_id)
    return entity.point if entity else None


def _trace_action(
    state: ParadeState,
    owner_id: str,
    action: AnimationAction,
    samples: int,
    epsilon: float,
) -> PathSegment | None:
    # Group moves trace the anchor they target; wheels trace the block's centre.
    anchor = action.group_anchor if isinstance(action, MoveAction) else AnchorCode.C
    duration = max(action.duration, epsilon)
    points: list[Point] = []
    for k in range(samples + 1):
        frame = evaluate(state, action.start_time + duration * k / samples, epsilon)
        p = _reference(frame, state, owner_id, anchor)
        if p is None:
            return None
        points.append(p)

    pivot = None
    if isinstance(action, WheelAction) and owner_id in state.groups:
        start = evaluate(state, action.start_time, epsilon)
        pivot = resolve_pivot((e.point for e in start.entities if e.group_id == owner_id), action.pivot_corner)
    return PathSegment(owner_id, action.id, action.type.value, tuple(points), pivot)


def trace_track(
    state: ParadeState,
    owner_id: str,
    samples_per_action: int = DEFAULT_SAMPLES,
    epsilon: float = DEFAULT_EPSILON,
) -> list[PathSegment]:
    """Segments for every MOVE / WHEEL of one owner, in start-time order."""
    track = state.animation.tracks.get(owner_id)
    if track is None or not state.has_owner(owner_id):
        return []
    samples = max(1, samples_per_action)
    segments: list[PathSegment] = []
    for action in sort_actions(track.actions):
        if not isinstance(action, (MoveAction, WheelAction)):
            continue
        seg = _trace_action(state, owner_id, action, samples, epsilon)
        if seg is not None:
            segments.append(seg)
    return segments


def trace_all(
    state: ParadeState,
    samples_per_action: int = DEFAULT_SAMPLES,
    epsilon: float = DEFAULT_EPSILON,
) -> dict[str, list[PathSegment]]:
    """Segments keyed by owner id; dangling tracks are left out."""
    return {
        owner_id: trace_track(state, owner_id, samples_per_action, epsilon)
        for owner_id in state.animation.tracks
        if state.has_owner(owner_id)
    }
