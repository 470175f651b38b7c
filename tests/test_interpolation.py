"""Tests for path geometry — direct, L-shaped and waypoint routes.

Covers:
- clamp01 / lerp guards against non-finite input
- DIRECT straight-line interpolation
- ORTHOGONAL phase split proportional to axis distance (both orders)
- Waypoint legs split by length
- Degenerate (zero-length) routes jump to the target
"""

import math
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from paradesim.core.actions import MoveAction
from paradesim.core.enums import MovePathMode, OrthogonalOrder
from paradesim.core.models import Point
from paradesim.systems.interpolation import (
    clamp01,
    interpolate,
    interpolate_move,
    interpolate_orthogonal,
    interpolate_via,
    lerp,
)


class TestScalars:
    def test_clamp01(self):
        assert clamp01(-0.5) == 0.0
        assert clamp01(0.25) == 0.25
        assert clamp01(3.0) == 1.0

    def test_clamp01_non_finite(self):
        assert clamp01(math.inf) == 1.0
        assert clamp01(-math.inf) == 0.0
        assert clamp01(math.nan) == 0.0

    def test_lerp_basic(self):
        assert lerp(0.0, 10.0, 0.5) == 5.0
        assert lerp(0.0, 10.0, 2.0) == 10.0

    def test_lerp_non_finite_endpoints(self):
        """A NaN start reads as 0, a NaN end as 'stay at start'."""
        assert lerp(math.nan, 10.0, 0.5) == 5.0
        assert lerp(2.0, math.inf, 0.5) == 2.0


class TestDirect:
    def test_midpoint(self):
        p = interpolate(Point(0, 0), Point(10, 0), 0.5, MovePathMode.DIRECT)
        assert p == Point(5, 0)

    def test_progress_clamped(self):
        assert interpolate(Point(0, 0), Point(10, 4), 1.7, MovePathMode.DIRECT) == Point(10, 4)
        assert interpolate(Point(0, 0), Point(10, 4), -1.0, MovePathMode.DIRECT) == Point(0, 0)


class TestOrthogonal:
    """(0,0) -> (10,6): x leg takes 10/16 of the action."""

    def test_x_first_during_x_leg(self):
        p = interpolate_orthogonal(Point(0, 0), Point(10, 6), 0.3125, OrthogonalOrder.X_THEN_Y)
        assert p == Point(5, 0)

    def test_x_first_at_corner(self):
        p = interpolate_orthogonal(Point(0, 0), Point(10, 6), 0.625, OrthogonalOrder.X_THEN_Y)
        assert p == Point(10, 0)

    def test_x_first_during_y_leg(self):
        p = interpolate_orthogonal(Point(0, 0), Point(10, 6), 0.8125, OrthogonalOrder.X_THEN_Y)
        assert p.x == 10
        assert p.y == pytest.approx(3.0)

    def test_x_first_end(self):
        assert interpolate_orthogonal(Point(0, 0), Point(10, 6), 1.0, OrthogonalOrder.X_THEN_Y) == Point(10, 6)

    def test_y_first_at_corner(self):
        p = interpolate_orthogonal(Point(0, 0), Point(10, 6), 0.375, OrthogonalOrder.Y_THEN_X)
        assert p == Point(0, 6)

    def test_y_first_during_y_leg(self):
        p = interpolate_orthogonal(Point(0, 0), Point(10, 6), 0.1875, OrthogonalOrder.Y_THEN_X)
        assert p.x == 0
        assert p.y == pytest.approx(3.0)

    def test_single_axis_move(self):
        """Pure y move with X_THEN_Y: the empty x leg is skipped."""
        p = interpolate_orthogonal(Point(2, 0), Point(2, 8), 0.5, OrthogonalOrder.X_THEN_Y)
        assert p == Point(2, 4)

    def test_zero_distance_returns_target(self):
        p = interpolate_orthogonal(Point(3, 3), Point(3, 3), 0.5, OrthogonalOrder.X_THEN_Y)
        assert p == Point(3, 3)

    def test_default_mode_is_orthogonal(self):
        assert interpolate(Point(0, 0), Point(10, 6), 0.625) == Point(10, 0)


class TestWaypoint:
    """(0,0) -> (0,10) -> (10,10): equal legs, split at 0.5."""

    def test_first_leg(self):
        assert interpolate_via(Point(0, 0), Point(0, 10), Point(10, 10), 0.25) == Point(0, 5)

    def test_at_waypoint(self):
        assert interpolate_via(Point(0, 0), Point(0, 10), Point(10, 10), 0.5) == Point(0, 10)

    def test_second_leg(self):
        assert interpolate_via(Point(0, 0), Point(0, 10), Point(10, 10), 0.75) == Point(5, 10)

    def test_unequal_legs(self):
        """Leg lengths 3 and 9: the waypoint is reached at progress 0.25."""
        p = interpolate_via(Point(0, 0), Point(3, 0), Point(3, 9), 0.25)
        assert p.x == pytest.approx(3.0)
        assert p.y == pytest.approx(0.0)

    def test_degenerate_returns_target(self):
        assert interpolate_via(Point(1, 1), Point(1, 1), Point(1, 1), 0.3) == Point(1, 1)

    def test_waypoint_overrides_path_mode(self):
        action = MoveAction(
            id="m", start_time=0, duration=1, target_x=10, target_y=10,
            path_mode=MovePathMode.DIRECT, waypoint=Point(0, 10),
        )
        assert interpolate_move(Point(0, 0), Point(10, 10), 0.5, action) == Point(0, 10)

    def test_move_without_waypoint_uses_mode(self):
        action = MoveAction(id="m", start_time=0, duration=1, target_x=10, target_y=0, path_mode=MovePathMode.DIRECT)
        assert interpolate_move(Point(0, 0), Point(10, 0), 0.5, action) == Point(5, 0)
