"""Step handler protocol — one pure function per (action type, owner kind)."""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar

from paradesim.core.models import Pose

A = TypeVar("A", contravariant=True)

# Member id -> pose, in member iteration order.
PoseMap = dict[str, Pose]


class StepHandler(Protocol, Generic[A]):
    """Applies one action at a given progress.

    Both methods are pure: they receive the pose(s) at the *start* of the
    action and return new pose(s) without touching their inputs.
    """

    @staticmethod
    def apply_entity(pose: Pose, action: A, progress: float) -> Pose: ...

    @staticmethod
    def apply_group(poses: PoseMap, action: A, progress: float) -> PoseMap: ...
