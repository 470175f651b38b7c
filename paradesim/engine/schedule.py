"""Action scheduling: which actions apply at time ``t``, and how far along.

Evaluation is a fold over the prefix of fully completed actions followed by
at most one partially applied action. Everything after that has not started
from the owner's point of view, even if its ``start_time`` has passed (an
overlapping track).
"""

from __future__ import annotations

from functools import reduce
from itertools import takewhile
from typing import Callable, Iterable, TypeVar

from paradesim.core.actions import AnimationAction
from paradesim.systems.interpolation import clamp01

S = TypeVar("S")

DEFAULT_EPSILON = 1e-3

Step = tuple[AnimationAction, float]


def sort_actions(actions: Iterable[AnimationAction]) -> list[AnimationAction]:
    """Ascending by start time; ties keep their original order."""
    return sorted(actions, key=lambda a: a.start_time)


def action_progress(action: AnimationAction, t: float, epsilon: float = DEFAULT_EPSILON) -> float:
    """Clamped fraction of *action* elapsed at *t*.

    Zero and negative durations are stretched to *epsilon*, which makes the
    action an instantaneous jump just after its start time.
    """
    duration = max(action.duration, epsilon)
    return clamp01((t - action.start_time) / duration)


def active_steps(
    actions: Iterable[AnimationAction],
    t: float,
    epsilon: float = DEFAULT_EPSILON,
) -> list[Step]:
    """Completed actions (progress 1) plus the one in progress, if any."""
    started = [
        (a, action_progress(a, t, epsilon))
        for a in takewhile(lambda a: a.start_time <= t, sort_actions(actions))
    ]
    done = list(takewhile(lambda step: step[1] >= 1.0, started))
    return done + started[len(done):len(done) + 1]


def fold_steps(initial: S, steps: Iterable[Step], apply: Callable[[S, AnimationAction, float], S]) -> S:
    """Thread *initial* through ``apply(state, action, progress)`` for each step."""
    return reduce(lambda state, step: apply(state, step[0], step[1]), steps, initial)
