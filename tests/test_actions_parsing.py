"""Tests for reading saved parade JSON into typed actions and models.

Covers:
- Payload defaults applied once at parse time
- Missing / non-finite targets become "stay" (None)
- Unknown or malformed records are rejected
- Older saves without groups, non-finite entity fields
"""

import math
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from paradesim.core.actions import (
    AnimationState,
    MoveAction,
    TurnAction,
    WheelAction,
    action_to_dict,
    parse_action,
)
from paradesim.core.enums import AnchorCode, MovePathMode, OrthogonalOrder, PivotCorner, TerrainType
from paradesim.core.errors import InvalidActionError
from paradesim.core.models import Point, finite_or, optional_finite
from paradesim.core.parade import ParadeState


def _record(type_: str, payload: dict | None = None, **extra) -> dict:
    raw = {"id": "a1", "type": type_, "startTime": 1.5, "duration": 2.0, "payload": payload or {}}
    raw.update(extra)
    return raw


class TestMoveParsing:
    def test_defaults(self):
        action = parse_action(_record("MOVE"))
        assert isinstance(action, MoveAction)
        assert action.target_x is None and action.target_y is None
        assert action.path_mode is MovePathMode.ORTHOGONAL
        assert action.orthogonal_order is OrthogonalOrder.X_THEN_Y
        assert action.group_anchor is AnchorCode.TL
        assert action.waypoint is None
        assert action.end_time == 3.5

    def test_explicit_fields(self):
        action = parse_action(_record("MOVE", {
            "targetX": 4, "targetY": -2, "movePathMode": "DIRECT",
            "orthogonalOrder": "Y_THEN_X", "groupAnchor": "BR",
            "waypoint": {"x": 1, "y": 1},
        }))
        assert (action.target_x, action.target_y) == (4.0, -2.0)
        assert action.path_mode is MovePathMode.DIRECT
        assert action.orthogonal_order is OrthogonalOrder.Y_THEN_X
        assert action.group_anchor is AnchorCode.BR
        assert action.waypoint == Point(1, 1)

    def test_non_finite_targets_become_none(self):
        action = parse_action(_record("MOVE", {"targetX": math.nan, "targetY": math.inf}))
        assert action.target_x is None
        assert action.target_y is None

    def test_target_from_fills_missing_axes(self):
        action = parse_action(_record("MOVE", {"targetY": 9}))
        assert action.target_from(Point(3, 0)) == Point(3, 9)

    def test_bad_waypoint_dropped(self):
        action = parse_action(_record("MOVE", {"waypoint": {"x": math.nan, "y": 1}}))
        assert action.waypoint is None
        action = parse_action(_record("MOVE", {"waypoint": "north"}))
        assert action.waypoint is None

    def test_unknown_enum_values_fall_back(self):
        action = parse_action(_record("MOVE", {"movePathMode": "ZIGZAG", "groupAnchor": "XX"}))
        assert action.path_mode is MovePathMode.ORTHOGONAL
        assert action.group_anchor is AnchorCode.TL


class TestTurnAndWheelParsing:
    def test_turn(self):
        action = parse_action(_record("TURN", {"targetRotation": 270}))
        assert isinstance(action, TurnAction)
        assert action.target_rotation == 270

    def test_turn_missing_target(self):
        assert parse_action(_record("TURN")).target_rotation is None

    def test_wheel_defaults(self):
        action = parse_action(_record("WHEEL"))
        assert isinstance(action, WheelAction)
        assert action.wheel_angle == 90
        assert action.pivot_corner is PivotCorner.TL

    def test_wheel_explicit_zero_kept(self):
        assert parse_action(_record("WHEEL", {"wheelAngle": 0})).wheel_angle == 0

    def test_wheel_nan_angle_uses_default(self):
        assert parse_action(_record("WHEEL", {"wheelAngle": math.nan})).wheel_angle == 90

    def test_wheel_centre_pivot(self):
        assert parse_action(_record("WHEEL", {"pivotCorner": "CENTER"})).pivot_corner is PivotCorner.CENTER


class TestMalformed:
    def test_unknown_type(self):
        with pytest.raises(InvalidActionError):
            parse_action(_record("SALUTE"))

    def test_missing_id(self):
        raw = _record("TURN")
        del raw["id"]
        with pytest.raises(InvalidActionError):
            parse_action(raw)

    def test_invalid_action_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_action({"type": "MOVE"})

    def test_missing_timing_defaults_to_zero(self):
        action = parse_action({"id": "t", "type": "TURN"})
        assert action.start_time == 0.0
        assert action.duration == 0.0


def test_action_to_dict_inverse():
    raw = _record("MOVE", {"targetX": 4.0, "movePathMode": "DIRECT", "waypoint": {"x": 1.0, "y": 2.0}})
    action = parse_action(raw)
    out = action_to_dict(action)
    assert out["payload"]["targetX"] == 4.0
    assert "targetY" not in out["payload"]
    assert parse_action(out) == action


class TestParadeState:
    def test_old_save_without_groups(self):
        state = ParadeState.from_dict({
            "config": {"id": "p1", "title": "Old", "terrain": "GRASS"},
            "entities": [{"id": "e1", "type": "PC", "x": 1, "y": 2}],
            "animation": {"tracks": {}},
        })
        assert state.groups == {}
        assert state.config.terrain is TerrainType.GRASS
        assert state.animation.duration == 60.0

    def test_group_key_supplies_id(self):
        state = ParadeState.from_dict({"groups": {"g1": {"label": "Alpha"}}})
        assert state.groups["g1"].id == "g1"
        assert state.groups["g1"].label == "Alpha"

    def test_non_finite_entity_fields(self):
        state = ParadeState.from_dict({"entities": [{"id": "e1", "type": "PC", "x": math.nan, "y": "3"}]})
        e = state.entities[0]
        assert (e.x, e.y, e.rotation) == (0.0, 0.0, 0.0)

    def test_unknown_terrain_falls_back(self):
        state = ParadeState.from_dict({"config": {"terrain": "LAVA"}})
        assert state.config.terrain is TerrainType.ASPHALT

    def test_round_trip_through_dict(self):
        raw = {
            "config": {"id": "p1", "title": "Parade", "width": 80, "height": 50, "terrain": "SAND", "lastModified": 5},
            "entities": [{"id": "e1", "type": "TROOPER", "label": "1", "x": 1, "y": 2, "rotation": 90, "groupId": "g1"}],
            "groups": {"g1": {"id": "g1", "label": "Alpha", "rotation": 0, "showLabel": False, "type": "CONTINGENT"}},
            "animation": {"duration": 30, "tracks": {"g1": {"ownerId": "g1", "actions": [_record("WHEEL")]}}},
        }
        state = ParadeState.from_dict(raw)
        assert ParadeState.from_dict(state.to_dict()).to_dict() == state.to_dict()
        assert state.members_of("g1")[0].id == "e1"
        assert state.has_owner("g1") and state.has_owner("e1")
        assert not state.has_owner("nobody")


def test_animation_state_defaults():
    anim = AnimationState.from_dict(None)
    assert anim.duration == 60.0
    assert anim.tracks == {}


def test_finite_helpers():
    assert finite_or(True, 7.0) == 7.0
    assert finite_or("12", 7.0) == 7.0
    assert finite_or(3, 7.0) == 3.0
    assert optional_finite(None) is None
    assert optional_finite(math.nan) is None
    assert optional_finite(2) == 2.0
