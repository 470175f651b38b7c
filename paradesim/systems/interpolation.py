"""Path geometry shared by entity moves, group moves and the path trace.

All functions are linear in time; ``progress`` is the clamped fraction of an
action's duration that has elapsed.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from paradesim.core.enums import MovePathMode, OrthogonalOrder
from paradesim.core.models import Point

if TYPE_CHECKING:
    from paradesim.core.actions import MoveAction

# Distances below this are treated as "no movement".
DISTANCE_TOLERANCE = 1e-9


def clamp01(t: float) -> float:
    if not math.isfinite(t):
        return 1.0 if t > 0 else 0.0
    return 0.0 if t < 0.0 else 1.0 if t > 1.0 else t


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation that never emits a non-finite number.

    A non-finite *a* is read as 0, a non-finite *b* as *a*.
    """
    if not math.isfinite(a):
        a = 0.0
    if not math.isfinite(b):
        b = a
    return a + (b - a) * clamp01(t)


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def _phase(progress: float, begin: float, length: float) -> float:
    """Local progress inside a phase ``[begin, begin + length]``."""
    if length <= DISTANCE_TOLERANCE:
        return 1.0
    return (progress - begin) / length


def interpolate_orthogonal(start: Point, target: Point, progress: float, order: OrthogonalOrder) -> Point:
    """L-shaped route: one axis fully, then the other.

    Phase lengths are proportional to the distance covered on each axis,
    so the owner marches at a constant speed and turns the corner.
    """
    dx = target.x - start.x
    dy = target.y - start.y
    total = abs(dx) + abs(dy)
    if not math.isfinite(total) or total <= DISTANCE_TOLERANCE:
        return target

    if order is OrthogonalOrder.X_THEN_Y:
        frac_x = abs(dx) / total
        if progress < frac_x:
            return Point(lerp(start.x, target.x, _phase(progress, 0.0, frac_x)), start.y)
        return Point(target.x, lerp(start.y, target.y, _phase(progress, frac_x, 1.0 - frac_x)))

    frac_y = abs(dy) / total
    if progress < frac_y:
        return Point(start.x, lerp(start.y, target.y, _phase(progress, 0.0, frac_y)))
    return Point(lerp(start.x, target.x, _phase(progress, frac_y, 1.0 - frac_y)), target.y)


def interpolate(
    start: Point,
    target: Point,
    progress: float,
    mode: MovePathMode = MovePathMode.ORTHOGONAL,
    order: OrthogonalOrder = OrthogonalOrder.X_THEN_Y,
) -> Point:
    """Point at *progress* along the route selected by *mode*."""
    progress = clamp01(progress)
    if mode is MovePathMode.DIRECT:
        return lerp_point(start, target, progress)
    return interpolate_orthogonal(start, target, progress, order)


def interpolate_via(start: Point, waypoint: Point, target: Point, progress: float) -> Point:
    """Two straight legs through *waypoint*, split by leg length."""
    progress = clamp01(progress)
    d1 = start.distance(waypoint)
    d2 = waypoint.distance(target)
    if not math.isfinite(d1 + d2) or d1 + d2 <= DISTANCE_TOLERANCE:
        return target
    split = d1 / (d1 + d2)
    if progress <= split:
        return lerp_point(start, waypoint, _phase(progress, 0.0, split))
    return lerp_point(waypoint, target, _phase(progress, split, 1.0 - split))


def interpolate_move(start: Point, target: Point, progress: float, action: MoveAction) -> Point:
    """Route for a MOVE action: waypoint first, then its path mode."""
    if action.waypoint is not None:
        return interpolate_via(start, action.waypoint, target, progress)
    return interpolate(start, target, progress, action.path_mode, action.orthogonal_order)
