"""Replays one owner's track against a single entity."""

from __future__ import annotations

from typing import Iterable

from paradesim.actions import STEP_HANDLERS
from paradesim.core.actions import AnimationAction
from paradesim.core.models import Entity, Pose, finite_or
from paradesim.engine.schedule import DEFAULT_EPSILON, active_steps, fold_steps


def _apply(pose: Pose, action: AnimationAction, progress: float) -> Pose:
    # Each action starts from the previous action's fully applied end pose.
    return STEP_HANDLERS[action.type].apply_entity(pose, action, progress)


def evaluate_entity(
    base: Entity,
    actions: Iterable[AnimationAction],
    t: float,
    epsilon: float = DEFAULT_EPSILON,
) -> Pose:
    """Pose of *base* at time *t*."""
    initial = Pose(
        finite_or(base.x, 0.0),
        finite_or(base.y, 0.0),
        finite_or(base.rotation, 0.0),
    )
    return fold_steps(initial, active_steps(actions, t, epsilon), _apply)
