"""Timeline editing helpers.

These keep the one invariant the evaluator relies on but does not enforce:
actions on a track occupy non-overlapping ``[start, start + duration)``
intervals. Every helper returns a new :class:`ParadeState`; the input is
left untouched so it can stay on an undo stack.
"""

from __future__ import annotations

import dataclasses
import logging
import time
import uuid
from typing import Any, Iterable

from paradesim.core.actions import (
    ACTION_DEFAULTS,
    AnimationAction,
    AnimationState,
    AnimationTrack,
    MoveAction,
    TurnAction,
    WheelAction,
)
from paradesim.core.enums import ActionType
from paradesim.core.errors import ActionOverlapError, InvalidActionError, UnknownActionError, UnknownOwnerError
from paradesim.core.models import Point
from paradesim.core.parade import ParadeState
from paradesim.engine.schedule import sort_actions
from paradesim.engine.timeline import evaluate
from paradesim.systems.anchor import resolve_anchor

logger = logging.getLogger(__name__)

DEFAULT_ACTION_DURATION = 2.0
NEW_MOVE_OFFSET = 5.0  # paces to the right of the owner's reference point
NEW_TURN_ROTATION = 90.0


def overlaps(a_start: float, a_duration: float, b_start: float, b_duration: float) -> bool:
    """Strict overlap of two half-open intervals."""
    return a_start < b_start + b_duration and a_start + a_duration > b_start


def find_overlap(
    actions: Iterable[AnimationAction],
    start: float,
    duration: float,
    ignore_id: str | None = None,
) -> AnimationAction | None:
    for a in sort_actions(actions):
        if a.id != ignore_id and overlaps(start, duration, a.start_time, a.duration):
            return a
    return None


def find_free_start(actions: Iterable[AnimationAction], start: float, duration: float) -> float:
    """Earliest start ``>= start`` that overlaps nothing, appending after clashes."""
    actions = list(actions)
    while (clash := find_overlap(actions, start, duration)) is not None:
        start = clash.end_time
    return start


def timeline_end(state: ParadeState) -> float:
    """Latest end time over every track (0 for an empty timeline)."""
    return max(
        (a.end_time for track in state.animation.tracks.values() for a in track.actions),
        default=0.0,
    )


def _with_tracks(state: ParadeState, tracks: dict[str, AnimationTrack], track_order: list[str] | None = None) -> ParadeState:
    anim = state.animation
    return ParadeState(
        config=dataclasses.replace(state.config, last_modified=int(time.time() * 1000)),
        entities=list(state.entities),
        groups=dict(state.groups),
        animation=AnimationState(
            duration=anim.duration,
            tracks=tracks,
            track_order=list(anim.track_order if track_order is None else track_order),
        ),
    )


def _reference_point(state: ParadeState, owner_id: str, at_time: float) -> tuple[Point, float]:
    """Where the owner stands (and faces) at *at_time*."""
    frame = evaluate(state, at_time)
    if owner_id in state.groups:
        members = [e for e in frame.entities if e.group_id == owner_id]
        anchor = resolve_anchor((m.point for m in members), ACTION_DEFAULTS[ActionType.MOVE]["group_anchor"])
        return anchor, members[0].rotation if members else 0.0
    entity = frame.entity(owner_id)
    if entity is None:
        raise UnknownOwnerError(owner_id)
    return entity.point, entity.rotation


def add_action(
    state: ParadeState,
    owner_id: str,
    action_type: ActionType,
    at_time: float,
    duration: float = DEFAULT_ACTION_DURATION,
    action_id: str | None = None,
) -> tuple[ParadeState, AnimationAction]:
    """Append a new action for *owner_id* at the first free slot from *at_time*."""
    if not state.has_owner(owner_id):
        raise UnknownOwnerError(owner_id)

    track = state.animation.tracks.get(owner_id) or AnimationTrack(owner_id=owner_id)
    start = find_free_start(track.actions, max(at_time, 0.0), duration)
    action_id = action_id or str(uuid.uuid4())

    action: AnimationAction
    match action_type:
        case ActionType.MOVE:
            ref, _ = _reference_point(state, owner_id, start)
            action = MoveAction(
                id=action_id, start_time=start, duration=duration,
                target_x=ref.x + NEW_MOVE_OFFSET, target_y=ref.y,
            )
        case ActionType.TURN:
            action = TurnAction(id=action_id, start_time=start, duration=duration, target_rotation=NEW_TURN_ROTATION)
        case ActionType.WHEEL:
            action = WheelAction(id=action_id, start_time=start, duration=duration)

    tracks = dict(state.animation.tracks)
    tracks[owner_id] = AnimationTrack(owner_id=owner_id, actions=track.actions + (action,))
    order = list(state.animation.track_order)
    if owner_id not in order:
        order.append(owner_id)
    logger.debug("Added %s %s for %s at t=%.2f", action.type.value, action.id, owner_id, start)
    return _with_tracks(state, tracks, order), action


def _locate(state: ParadeState, action_id: str) -> tuple[str, int]:
    for owner_id, track in state.animation.tracks.items():
        for i, a in enumerate(track.actions):
            if a.id == action_id:
                return owner_id, i
    raise UnknownActionError(action_id)


def update_action(state: ParadeState, action_id: str, **changes: Any) -> ParadeState:
    """Replace fields of one action; refuses timing edits that would overlap."""
    owner_id, index = _locate(state, action_id)
    track = state.animation.tracks[owner_id]
    try:
        updated = dataclasses.replace(track.actions[index], **changes)
    except TypeError as exc:
        raise InvalidActionError(str(exc)) from exc

    if "start_time" in changes or "duration" in changes:
        clash = find_overlap(track.actions, updated.start_time, updated.duration, ignore_id=action_id)
        if clash is not None:
            raise ActionOverlapError(action_id, clash.id)

    actions = list(track.actions)
    actions[index] = updated
    tracks = dict(state.animation.tracks)
    tracks[owner_id] = AnimationTrack(owner_id=owner_id, actions=tuple(actions))
    return _with_tracks(state, tracks)


def remove_action(state: ParadeState, action_id: str) -> ParadeState:
    owner_id, index = _locate(state, action_id)
    track = state.animation.tracks[owner_id]
    tracks = dict(state.animation.tracks)
    tracks[owner_id] = AnimationTrack(
        owner_id=owner_id,
        actions=track.actions[:index] + track.actions[index + 1:],
    )
    return _with_tracks(state, tracks)


def reorder_tracks(state: ParadeState, order: list[str]) -> ParadeState:
    """Set the display order of tracks (owners not listed keep their relative order after)."""
    rest = [o for o in state.animation.track_order if o not in order]
    return _with_tracks(state, dict(state.animation.tracks), list(order) + rest)
