"""Timeline evaluation — the single entry point used by playback, scrub preview,
the path trace and the API.

``evaluate(base, t)`` re-derives every pose from ``t = 0``. It keeps no state
between calls, never mutates *base*, and never raises for well-typed input,
so the playback thread and request handlers can call it concurrently.
"""

from __future__ import annotations

import logging

from paradesim.core.models import Entity, finite_or
from paradesim.core.parade import ParadeState
from paradesim.core.snapshot import Snapshot
from paradesim.engine.entity_track import evaluate_entity
from paradesim.engine.group_track import evaluate_group
from paradesim.engine.schedule import DEFAULT_EPSILON

logger = logging.getLogger(__name__)


def _clean_copy(entity: Entity) -> Entity:
    e = entity.copy()
    e.x = finite_or(e.x, 0.0)
    e.y = finite_or(e.y, 0.0)
    e.rotation = finite_or(e.rotation, 0.0)
    return e


def evaluate(base: ParadeState, t: float, epsilon: float = DEFAULT_EPSILON) -> Snapshot:
    """Entities and groups as they stand at time *t* (seconds, ``t >= 0``)."""
    entities = [_clean_copy(e) for e in base.entities]
    groups = {gid: g.copy() for gid, g in base.groups.items()}

    index: dict[str, int] = {}
    for i, e in enumerate(entities):
        index.setdefault(e.id, i)

    for owner_id, track in base.animation.tracks.items():
        if not track.actions:
            continue

        if owner_id in groups:
            positions = [i for i, e in enumerate(entities) if e.group_id == owner_id]
            updated = evaluate_group([entities[i] for i in positions], track.actions, t, epsilon)
            for i, e in zip(positions, updated):
                entities[i] = e
        elif owner_id in index:
            target = entities[index[owner_id]]
            target.apply_pose(evaluate_entity(target, track.actions, t, epsilon))
        else:
            # Owner deleted after its track was created; the editor cleans up later.
            logger.debug("Skipping dangling track for owner %r", owner_id)

    return Snapshot.build(entities, groups)
