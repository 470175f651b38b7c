"""Enumerations used throughout the engine.

All enums are ``str`` enums so their values round-trip through the saved
parade JSON unchanged.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ActionType(str, Enum):
    """Kinds of timed maneuver an owner can perform."""

    MOVE = "MOVE"
    TURN = "TURN"
    WHEEL = "WHEEL"


@unique
class MovePathMode(str, Enum):
    """Geometry used to get from a MOVE's start to its target."""

    DIRECT = "DIRECT"
    ORTHOGONAL = "ORTHOGONAL"  # L-shaped, one axis at a time


@unique
class OrthogonalOrder(str, Enum):
    """Which axis an ORTHOGONAL move covers first."""

    X_THEN_Y = "X_THEN_Y"
    Y_THEN_X = "Y_THEN_X"


@unique
class AnchorCode(str, Enum):
    """Nine reference points of a formation's bounding box."""

    TL = "TL"
    TM = "TM"
    TR = "TR"
    CL = "CL"
    C = "C"
    CR = "CR"
    BL = "BL"
    BM = "BM"
    BR = "BR"


@unique
class PivotCorner(str, Enum):
    """Wheel pivots: a five-way subset of the anchor vocabulary."""

    TL = "TL"
    TR = "TR"
    BL = "BL"
    BR = "BR"
    CENTER = "CENTER"


@unique
class EntityType(str, Enum):
    """Sprite kinds placed on the ground. Opaque to the timeline engine."""

    PC = "PC"
    RSM = "RSM"
    COLOURS = "COLOURS"
    CONTINGENT = "CONTINGENT"
    TROOPER = "TROOPER"
    OFFICER = "OFFICER"
    MARKER = "MARKER"
    REVIEWING_OFFICER = "REVIEWING_OFFICER"

    # Furniture
    SALUTING_BASE = "SALUTING_BASE"
    ROSTRUM = "ROSTRUM"
    SPEAKER = "SPEAKER"
    MIXER = "MIXER"
    AWARD_TABLE = "AWARD_TABLE"
    TROPHY_CUP = "TROPHY_CUP"
    TROPHY_PLAQUE = "TROPHY_PLAQUE"
    TROPHY_SHIELD = "TROPHY_SHIELD"


@unique
class TerrainType(str, Enum):
    """Ground surface of the parade square."""

    ASPHALT = "ASPHALT"
    GRASS = "GRASS"
    SAND = "SAND"
