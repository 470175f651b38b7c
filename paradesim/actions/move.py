"""MoveStep — translates a lone entity or a whole formation.

A group move targets one anchor point of the formation's bounding box
(``group_anchor``, top-left by default). The anchor is interpolated along the
action's path and every member receives the same delta, so spacing inside
the block never changes.
"""

from __future__ import annotations

from paradesim.actions.base import PoseMap
from paradesim.core.actions import MoveAction
from paradesim.core.models import Pose
from paradesim.systems.anchor import resolve_anchor
from paradesim.systems.interpolation import interpolate_move


class MoveStep:
    """Stateless handler for MOVE actions."""

    @staticmethod
    def apply_entity(pose: Pose, action: MoveAction, progress: float) -> Pose:
        start = pose.point
        target = action.target_from(start)
        p = interpolate_move(start, target, progress, action)
        return Pose(p.x, p.y, pose.rotation).sanitized(pose)

    @staticmethod
    def apply_group(poses: PoseMap, action: MoveAction, progress: float) -> PoseMap:
        if not poses:
            return {}
        anchor = resolve_anchor((p.point for p in poses.values()), action.group_anchor)
        target = action.target_from(anchor)
        moved = interpolate_move(anchor, target, progress, action)
        dx = moved.x - anchor.x
        dy = moved.y - anchor.y
        return {
            mid: Pose(p.x + dx, p.y + dy, p.rotation).sanitized(p)
            for mid, p in poses.items()
        }
