"""Immutable evaluation result handed back to playback, preview and the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from paradesim.core.models import Entity, GroupMetadata


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Entities and groups at one instant of the timeline.

    Holds its own copies: nothing here aliases the base state's lists or
    dicts, and the group mapping is a read-only proxy.
    """

    entities: tuple[Entity, ...]
    groups: Mapping[str, GroupMetadata]
    _index: Mapping[str, int] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build(cls, entities: Iterable[Entity], groups: Mapping[str, GroupMetadata]) -> Snapshot:
        ents = tuple(entities)
        index: dict[str, int] = {}
        for i, e in enumerate(ents):
            index.setdefault(e.id, i)
        return cls(entities=ents, groups=MappingProxyType(dict(groups)), _index=MappingProxyType(index))

    def entity(self, entity_id: str) -> Entity | None:
        i = self._index.get(entity_id)
        return self.entities[i] if i is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "entities": [e.to_dict() for e in self.entities],
            "groups": {gid: g.to_dict() for gid, g in self.groups.items()},
        }
