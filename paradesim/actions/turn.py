"""TurnStep — heading changes, positions untouched."""

from __future__ import annotations

from paradesim.actions.base import PoseMap
from paradesim.core.actions import TurnAction
from paradesim.core.models import Pose, finite_or
from paradesim.systems.interpolation import clamp01, lerp


class TurnStep:
    """Stateless handler for TURN actions."""

    @staticmethod
    def apply_entity(pose: Pose, action: TurnAction, progress: float) -> Pose:
        target = action.target_rotation if action.target_rotation is not None else pose.rotation
        return Pose(pose.x, pose.y, lerp(pose.rotation, target, progress)).sanitized(pose)

    @staticmethod
    def apply_group(poses: PoseMap, action: TurnAction, progress: float) -> PoseMap:
        if not poses:
            return {}
        # The first member is the reference so repeated evaluation agrees.
        reference = finite_or(next(iter(poses.values())).rotation, 0.0)
        target = action.target_rotation if action.target_rotation is not None else reference
        delta = (target - reference) * clamp01(progress)
        return {
            mid: Pose(p.x, p.y, p.rotation + delta).sanitized(p)
            for mid, p in poses.items()
        }
