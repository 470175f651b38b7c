"""Geometry and hashing helpers used by the engine."""

from paradesim.systems.anchor import BoundingBox, bounding_box, resolve_anchor, resolve_pivot
from paradesim.systems.digest import frame_digest
from paradesim.systems.interpolation import interpolate, interpolate_move, interpolate_via, lerp

__all__ = [
    "BoundingBox",
    "bounding_box",
    "frame_digest",
    "interpolate",
    "interpolate_move",
    "interpolate_via",
    "lerp",
    "resolve_anchor",
    "resolve_pivot",
]
