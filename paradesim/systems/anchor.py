"""Anchor resolution over a formation's axis-aligned bounding box.

A group has no position of its own; whenever a MOVE or WHEEL needs "the
formation's top-left" (or centre, ...) it is derived here from the members'
current positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from paradesim.core.enums import AnchorCode, PivotCorner
from paradesim.core.models import Point, finite_or


@dataclass(frozen=True, slots=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def mid_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def mid_y(self) -> float:
        return (self.min_y + self.max_y) / 2


def bounding_box(points: Iterable[Point]) -> BoundingBox | None:
    """Box around *points*; ``None`` when empty. Non-finite coords count as 0."""
    box: BoundingBox | None = None
    for p in points:
        x = finite_or(p.x, 0.0)
        y = finite_or(p.y, 0.0)
        if box is None:
            box = BoundingBox(x, y, x, y)
        else:
            box = BoundingBox(min(box.min_x, x), min(box.min_y, y), max(box.max_x, x), max(box.max_y, y))
    return box


# (column, row) selectors: 0 = min, 1 = mid, 2 = max
_ANCHOR_CELLS: dict[AnchorCode, tuple[int, int]] = {
    AnchorCode.TL: (0, 0),
    AnchorCode.TM: (1, 0),
    AnchorCode.TR: (2, 0),
    AnchorCode.CL: (0, 1),
    AnchorCode.C: (1, 1),
    AnchorCode.CR: (2, 1),
    AnchorCode.BL: (0, 2),
    AnchorCode.BM: (1, 2),
    AnchorCode.BR: (2, 2),
}

_PIVOT_CELLS: dict[PivotCorner, tuple[int, int]] = {
    PivotCorner.TL: (0, 0),
    PivotCorner.TR: (2, 0),
    PivotCorner.BL: (0, 2),
    PivotCorner.BR: (2, 2),
    PivotCorner.CENTER: (1, 1),
}


def _cell(box: BoundingBox | None, col: int, row: int) -> Point:
    if box is None:
        return Point(0.0, 0.0)
    xs = (box.min_x, box.mid_x, box.max_x)
    ys = (box.min_y, box.mid_y, box.max_y)
    return Point(xs[col], ys[row])


def resolve_anchor(points: Iterable[Point], anchor: AnchorCode) -> Point:
    """Point of the formation a MOVE target refers to."""
    return _cell(bounding_box(points), *_ANCHOR_CELLS[anchor])


def resolve_pivot(points: Iterable[Point], corner: PivotCorner) -> Point:
    """Point a formation wheels about."""
    return _cell(bounding_box(points), *_PIVOT_CELLS[corner])
