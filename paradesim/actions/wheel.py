"""WheelStep — the drill wheel.

A formation pivots rigidly about one corner of its bounding box (or its
centre) and every trooper's heading follows the turn. A lone entity has no
formation to pivot, so it only turns in place.
"""

from __future__ import annotations

import math

from paradesim.actions.base import PoseMap
from paradesim.core.actions import WheelAction
from paradesim.core.models import Pose
from paradesim.systems.anchor import resolve_pivot
from paradesim.systems.interpolation import clamp01


class WheelStep:
    """Stateless handler for WHEEL actions."""

    @staticmethod
    def apply_entity(pose: Pose, action: WheelAction, progress: float) -> Pose:
        swept = action.wheel_angle * clamp01(progress)
        return Pose(pose.x, pose.y, pose.rotation + swept).sanitized(pose)

    @staticmethod
    def apply_group(poses: PoseMap, action: WheelAction, progress: float) -> PoseMap:
        if not poses:
            return {}
        pivot = resolve_pivot((p.point for p in poses.values()), action.pivot_corner)
        swept = action.wheel_angle * clamp01(progress)
        rad = math.radians(swept)
        cos = math.cos(rad)
        sin = math.sin(rad)

        out: PoseMap = {}
        for mid, p in poses.items():
            dx = p.x - pivot.x
            dy = p.y - pivot.y
            out[mid] = Pose(
                pivot.x + (dx * cos - dy * sin),
                pivot.y + (dx * sin + dy * cos),
                p.rotation + swept,
            ).sanitized(p)
        return out
