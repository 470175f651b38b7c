"""Core data models: Point, Pose, Entity, GroupMetadata."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping


def finite_or(value: Any, fallback: float) -> float:
    """Return *value* as a float if it is a finite number, else *fallback*."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    value = float(value)
    return value if math.isfinite(value) else fallback


def optional_finite(value: Any) -> float | None:
    """Finite float or ``None``, for "stay where you are" payload fields."""
    if value is None:
        return None
    result = finite_or(value, math.nan)
    return None if math.isnan(result) else result


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable 2D coordinate in paces."""

    x: float = 0.0
    y: float = 0.0

    def distance(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


@dataclass(frozen=True, slots=True)
class Pose:
    """Position plus heading (degrees, 0 = north, clockwise)."""

    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def sanitized(self, fallback: Pose) -> Pose:
        """Replace any non-finite component with the matching one from *fallback*."""
        return Pose(
            x=finite_or(self.x, fallback.x),
            y=finite_or(self.y, fallback.y),
            rotation=finite_or(self.rotation, fallback.rotation),
        )


@dataclass(frozen=True, slots=True)
class EntityConfig:
    """Composite sprite settings (contingent blocks). Not read by the engine."""

    ranks: int | None = None
    files: int | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> EntityConfig:
        return cls(ranks=raw.get("ranks"), files=raw.get("files"), color=raw.get("color"))

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in (("ranks", self.ranks), ("files", self.files), ("color", self.color)) if v is not None}


@dataclass(slots=True)
class Entity:
    """A labelled thing on the ground (trooper, officer or stand)."""

    id: str
    type: str
    label: str = ""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    group_id: str | None = None
    config: EntityConfig | None = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def apply_pose(self, pose: Pose) -> None:
        self.x = pose.x
        self.y = pose.y
        self.rotation = pose.rotation

    def copy(self) -> Entity:
        """Explicit value copy; ``config`` is frozen so it can be shared."""
        return Entity(
            id=self.id,
            type=self.type,
            label=self.label,
            x=self.x,
            y=self.y,
            rotation=self.rotation,
            group_id=self.group_id,
            config=self.config,
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Entity:
        config = raw.get("config")
        return cls(
            id=str(raw["id"]),
            type=str(raw.get("type", "")),
            label=str(raw.get("label", "")),
            x=finite_or(raw.get("x"), 0.0),
            y=finite_or(raw.get("y"), 0.0),
            rotation=finite_or(raw.get("rotation"), 0.0),
            group_id=raw.get("groupId"),
            config=EntityConfig.from_dict(config) if config else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
        }
        if self.group_id is not None:
            out["groupId"] = self.group_id
        if self.config is not None:
            out["config"] = self.config.to_dict()
        return out


@dataclass(frozen=True, slots=True)
class GroupConfig:
    """Structural settings of a formation (contingent size, colours party)."""

    rows: int | None = None
    cols: int | None = None
    colour_count: int | None = None
    has_colours_sergeant: bool | None = None
    flag_colors: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> GroupConfig:
        return cls(
            rows=raw.get("rows"),
            cols=raw.get("cols"),
            colour_count=raw.get("colourCount"),
            has_colours_sergeant=raw.get("hasColoursSergeant"),
            flag_colors=tuple(raw.get("flagColors") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.rows is not None:
            out["rows"] = self.rows
        if self.cols is not None:
            out["cols"] = self.cols
        if self.colour_count is not None:
            out["colourCount"] = self.colour_count
        if self.has_colours_sergeant is not None:
            out["hasColoursSergeant"] = self.has_colours_sergeant
        if self.flag_colors:
            out["flagColors"] = list(self.flag_colors)
        return out


@dataclass(slots=True)
class GroupMetadata:
    """A grouping label over entities sharing its id. Has no position of its own."""

    id: str
    label: str = ""
    rotation: float = 0.0  # formation bearing
    show_label: bool = True
    group_type: str | None = None  # CONTINGENT | COLOURS_PARTY | GENERIC
    config: GroupConfig | None = None

    def copy(self) -> GroupMetadata:
        return GroupMetadata(
            id=self.id,
            label=self.label,
            rotation=self.rotation,
            show_label=self.show_label,
            group_type=self.group_type,
            config=self.config,
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> GroupMetadata:
        config = raw.get("config")
        return cls(
            id=str(raw["id"]),
            label=str(raw.get("label", "")),
            rotation=finite_or(raw.get("rotation"), 0.0),
            show_label=bool(raw.get("showLabel", True)),
            group_type=raw.get("type"),
            config=GroupConfig.from_dict(config) if config else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "rotation": self.rotation,
            "showLabel": self.show_label,
        }
        if self.group_type is not None:
            out["type"] = self.group_type
        if self.config is not None:
            out["config"] = self.config.to_dict()
        return out
