"""Frame fingerprints using xxhash.

Two evaluations of the same ``(base, t)`` must produce the same digest; the
API hands it out so clients can skip redrawing an unchanged frame.
"""

from __future__ import annotations

import struct

import xxhash

from paradesim.core.snapshot import Snapshot

# Poses are rounded before hashing so -0.0 and 1e-15 noise do not change the digest.
_PRECISION = 9


def _norm(value: float) -> float:
    v = round(value, _PRECISION)
    return 0.0 if v == 0 else v


def frame_digest(snapshot: Snapshot) -> str:
    """Hex xxh64 digest over every entity pose and group bearing."""
    h = xxhash.xxh64()
    for e in sorted(snapshot.entities, key=lambda e: e.id):
        h.update(e.id.encode("utf-8"))
        h.update(struct.pack("<ddd", _norm(e.x), _norm(e.y), _norm(e.rotation)))
    for gid in sorted(snapshot.groups):
        h.update(gid.encode("utf-8"))
        h.update(struct.pack("<d", _norm(snapshot.groups[gid].rotation)))
    return h.hexdigest()
