"""The complete editable parade: ground config, entities, groups, timeline."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping

from paradesim.core.actions import AnimationState
from paradesim.core.enums import TerrainType
from paradesim.core.models import Entity, GroupMetadata, finite_or


@dataclass(slots=True)
class ParadeConfig:
    """Ground dimensions (paces) and presentation settings."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = "Untitled Parade"
    width: float = 100.0
    height: float = 60.0
    terrain: TerrainType = TerrainType.ASPHALT
    last_modified: int = field(default_factory=lambda: int(time.time() * 1000))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> ParadeConfig:
        if not raw:
            return cls()
        try:
            terrain = TerrainType(raw.get("terrain", TerrainType.ASPHALT))
        except ValueError:
            terrain = TerrainType.ASPHALT
        return cls(
            id=str(raw.get("id") or uuid.uuid4()),
            title=str(raw.get("title", "Untitled Parade")),
            width=finite_or(raw.get("width"), 100.0),
            height=finite_or(raw.get("height"), 60.0),
            terrain=terrain,
            last_modified=int(finite_or(raw.get("lastModified"), 0.0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "width": self.width,
            "height": self.height,
            "terrain": self.terrain.value,
            "lastModified": self.last_modified,
        }


@dataclass(slots=True)
class ParadeState:
    """Base snapshot handed to the timeline evaluator.

    The evaluator treats it as read-only; the editing helpers return new
    instances rather than mutating one in place.
    """

    config: ParadeConfig = field(default_factory=ParadeConfig)
    entities: list[Entity] = field(default_factory=list)
    groups: dict[str, GroupMetadata] = field(default_factory=dict)
    animation: AnimationState = field(default_factory=AnimationState)

    def entity(self, entity_id: str) -> Entity | None:
        for e in self.entities:
            if e.id == entity_id:
                return e
        return None

    def members_of(self, group_id: str) -> list[Entity]:
        return [e for e in self.entities if e.group_id == group_id]

    def has_owner(self, owner_id: str) -> bool:
        return owner_id in self.groups or self.entity(owner_id) is not None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ParadeState:
        # Older saves have no "groups" key at all.
        groups_raw = raw.get("groups") or {}
        return cls(
            config=ParadeConfig.from_dict(raw.get("config")),
            entities=[Entity.from_dict(e) for e in raw.get("entities") or ()],
            groups={str(gid): GroupMetadata.from_dict({"id": gid, **g}) for gid, g in groups_raw.items()},
            animation=AnimationState.from_dict(raw.get("animation")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "entities": [e.to_dict() for e in self.entities],
            "groups": {gid: g.to_dict() for gid, g in self.groups.items()},
            "animation": self.animation.to_dict(),
        }
