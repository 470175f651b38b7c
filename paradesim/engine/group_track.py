"""Replays one owner's track against a rigid formation.

Groups have no origin of their own. Each member keeps its own pose and every
action applies identical deltas (or the same rigid rotation) to all of them,
which preserves pairwise spacing for any progress.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from paradesim.actions import STEP_HANDLERS, PoseMap
from paradesim.core.actions import AnimationAction
from paradesim.core.models import Entity, Pose, finite_or
from paradesim.engine.schedule import DEFAULT_EPSILON, active_steps, fold_steps


def _apply(poses: PoseMap, action: AnimationAction, progress: float) -> PoseMap:
    return STEP_HANDLERS[action.type].apply_group(poses, action, progress)


def evaluate_group_poses(
    members: Sequence[Entity],
    actions: Iterable[AnimationAction],
    t: float,
    epsilon: float = DEFAULT_EPSILON,
) -> PoseMap:
    """Member id -> pose at time *t*, in member order.

    A repeated member id keeps the first member's pose; later duplicates are
    left out of the formation.
    """
    initial: PoseMap = {}
    for m in members:
        initial.setdefault(m.id, Pose(finite_or(m.x, 0.0), finite_or(m.y, 0.0), finite_or(m.rotation, 0.0)))
    if not initial:
        return {}
    return fold_steps(initial, active_steps(actions, t, epsilon), _apply)


def evaluate_group(
    members: Sequence[Entity],
    actions: Iterable[AnimationAction],
    t: float,
    epsilon: float = DEFAULT_EPSILON,
) -> list[Entity]:
    """Copies of *members* moved to their poses at time *t*."""
    poses = evaluate_group_poses(members, actions, t, epsilon)
    updated: list[Entity] = []
    seen: set[str] = set()
    for m in members:
        e = m.copy()
        if m.id not in seen:
            seen.add(m.id)
            e.apply_pose(poses[m.id])
        updated.append(e)
    return updated
