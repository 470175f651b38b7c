"""Tests for whole-parade timeline evaluation.

Covers:
- Entity and group tracks evaluated together
- Purity: same (base, t) gives the same frame, base is never mutated
- Seeking backwards reproduces earlier frames
- Dangling and empty tracks
- Non-finite base values and duplicate ids
- Group metadata (bearing) is carried through unchanged
"""

import copy
import math
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from paradesim.core.enums import AnchorCode, MovePathMode, PivotCorner
from paradesim.core.models import Entity
from paradesim.engine.timeline import evaluate
from paradesim.systems.digest import frame_digest
from tests.helpers.parade_builder import ParadeBuilder


def _parade():
    return (
        ParadeBuilder(duration=20)
        .entity("pc", x=0, y=0, kind="PC")
        .block("alpha", rows=2, cols=3, origin=(10, 10))
        .entity("rostrum", x=50, y=5, kind="ROSTRUM")
        .move("pc", "pc-m1", start=0, duration=4, x=20, y=0, mode=MovePathMode.DIRECT)
        .turn("pc", "pc-t1", start=4, duration=1, rotation=180)
        .move("alpha", "a-m1", start=1, duration=2, x=10, y=0, mode=MovePathMode.DIRECT)
        .wheel("alpha", "a-w1", start=3, duration=2, angle=90, pivot=PivotCorner.TL)
        .build()
    )


def _pose(snapshot, eid):
    e = snapshot.entity(eid)
    return (e.x, e.y, e.rotation)


class TestEvaluate:
    def test_time_zero_is_base(self):
        state = _parade()
        snap = evaluate(state, 0.0)
        assert [(e.id, e.x, e.y) for e in snap.entities] == [(e.id, e.x, e.y) for e in state.entities]

    def test_entity_track(self):
        snap = evaluate(_parade(), 2.0)
        assert _pose(snap, "pc") == (10, 0, 0)

    def test_entity_track_after_turn(self):
        assert _pose(evaluate(_parade(), 6.0), "pc") == (20, 0, 180)

    def test_group_track_moves_members(self):
        snap = evaluate(_parade(), 3.0)
        assert _pose(snap, "alpha-0-0") == (10, 0, 0)
        assert _pose(snap, "alpha-1-2") == (12, 1, 0)

    def test_group_wheel_after_move(self):
        snap = evaluate(_parade(), 5.0)
        x, y, rot = _pose(snap, "alpha-0-1")
        assert (x, y) == pytest.approx((10, 1))
        assert rot == 90

    def test_untracked_entity_is_static(self):
        assert _pose(evaluate(_parade(), 7.0), "rostrum") == (50, 5, 0)

    def test_entity_order_preserved(self):
        state = _parade()
        snap = evaluate(state, 4.2)
        assert [e.id for e in snap.entities] == [e.id for e in state.entities]

    def test_group_bearing_never_changes(self):
        state = (
            ParadeBuilder()
            .block("alpha", rows=2, cols=2)
            .wheel("alpha", "w", start=0, duration=1, angle=90)
            .build()
        )
        state.groups["alpha"].rotation = 15
        snap = evaluate(state, 1.0)
        assert snap.groups["alpha"].rotation == 15


class TestPurity:
    def test_deterministic(self):
        state = _parade()
        a = evaluate(state, 3.7)
        b = evaluate(state, 3.7)
        assert a.to_dict() == b.to_dict()
        assert frame_digest(a) == frame_digest(b)

    def test_base_not_mutated(self):
        state = _parade()
        before = copy.deepcopy(state.to_dict())
        for t in (0.0, 1.5, 3.3, 4.9, 20.0):
            evaluate(state, t)
        assert state.to_dict() == before

    def test_seek_backwards_matches_fresh(self):
        state = _parade()
        fresh = frame_digest(evaluate(state, 2.5))
        evaluate(state, 19.0)
        evaluate(state, 4.0)
        assert frame_digest(evaluate(state, 2.5)) == fresh

    def test_snapshot_does_not_alias_base(self):
        state = _parade()
        snap = evaluate(state, 0.0)
        snap.entities[0].x = 999
        assert state.entities[0].x == 0
        with pytest.raises(TypeError):
            snap.groups["intruder"] = None


class TestEdgeCases:
    def test_dangling_track_ignored(self):
        state = (
            ParadeBuilder()
            .entity("e1", x=1, y=1)
            .move("ghost", "g-m", start=0, duration=1, x=9, y=9)
            .build()
        )
        snap = evaluate(state, 1.0)
        assert _pose(snap, "e1") == (1, 1, 0)
        assert snap.entity("ghost") is None

    def test_empty_track(self):
        state = ParadeBuilder().entity("e1", x=2, y=3).empty_track("e1").build()
        assert _pose(evaluate(state, 5.0), "e1") == (2, 3, 0)

    def test_non_finite_base_values(self):
        state = ParadeBuilder().entity("e1").build()
        state.entities[0].x = math.nan
        state.entities[0].rotation = math.inf
        snap = evaluate(state, 0.0)
        assert _pose(snap, "e1") == (0, 0, 0)
        assert math.isnan(state.entities[0].x)

    def test_group_with_no_members(self):
        state = (
            ParadeBuilder()
            .group("empty")
            .entity("e1", x=1, y=1)
            .move("empty", "m", start=0, duration=1, x=5, y=5)
            .build()
        )
        snap = evaluate(state, 1.0)
        assert _pose(snap, "e1") == (1, 1, 0)

    def test_group_id_shadows_entity_id(self):
        """A track keyed by an id that is both a group and an entity drives the group."""
        state = (
            ParadeBuilder()
            .block("alpha", rows=1, cols=2)
            .entity("alpha", x=40, y=40)
            .move("alpha", "m", start=0, duration=1, x=5, y=0, mode=MovePathMode.DIRECT)
            .build()
        )
        snap = evaluate(state, 1.0)
        assert _pose(snap, "alpha-0-0") == (5, 0, 0)
        assert _pose(snap, "alpha") == (40, 40, 0)

    def test_duplicate_entity_ids_first_wins(self):
        state = (
            ParadeBuilder()
            .entity("dup", x=0, y=0)
            .entity("dup", x=5, y=5)
            .move("dup", "m", start=0, duration=1, x=10, y=0, mode=MovePathMode.DIRECT)
            .build()
        )
        snap = evaluate(state, 1.0)
        assert [(e.x, e.y) for e in snap.entities] == [(10, 0), (5, 5)]
        assert _pose(snap, "dup") == (10, 0, 0)

    def test_member_order_does_not_change_group_move(self):
        forward = ParadeBuilder().block("alpha", rows=2, cols=2, origin=(3, 3))
        forward.move("alpha", "m", start=0, duration=1, x=0, y=0, anchor=AnchorCode.C)
        state = forward.build()
        reversed_state = forward.build()
        reversed_state.entities = list(reversed(reversed_state.entities))
        assert frame_digest(evaluate(state, 0.6)) == frame_digest(evaluate(reversed_state, 0.6))

    def test_custom_epsilon(self):
        state = (
            ParadeBuilder()
            .entity("e1")
            .move("e1", "m", start=1, duration=0, x=10, y=0, mode=MovePathMode.DIRECT)
            .build()
        )
        assert _pose(evaluate(state, 1.5, epsilon=1.0), "e1") == (5, 0, 0)
        assert _pose(evaluate(state, 1.5), "e1") == (10, 0, 0)


def test_entity_in_group_with_its_own_track():
    """An individual track on a member applies on top of the base pose too."""
    state = (
        ParadeBuilder()
        .entity("solo", x=0, y=0, group="g")
        .group("g")
        .turn("solo", "t", start=0, duration=1, rotation=90)
        .build()
    )
    assert _pose(evaluate(state, 1.0), "solo") == (0, 0, 90)


def test_entity_constructed_directly():
    """Entities built outside the builder evaluate the same way."""
    state = ParadeBuilder().build()
    state.entities.append(Entity(id="x", type="MARKER", x=7, y=8))
    assert _pose(evaluate(state, 3.0), "x") == (7, 8, 0)
