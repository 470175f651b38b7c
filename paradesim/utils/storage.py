"""Save slots — parades persisted as one JSON index file.

The most recently saved parade sits first. Saving a parade whose id is
already stored replaces it in place; a new parade pushes the oldest one out
once ``max_slots`` is reached.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from paradesim.core.errors import ParadeNotFoundError
from paradesim.core.parade import ParadeState

logger = logging.getLogger(__name__)

INDEX_FILE = "parades.json"


class ParadeStore:
    """File-backed store of the last few parades."""

    __slots__ = ("_path", "_max_slots", "_lock")

    def __init__(self, directory: str | Path, max_slots: int = 3) -> None:
        self._path = Path(directory) / INDEX_FILE
        self._max_slots = max(1, max_slots)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.exception("Failed to load saves from %s", self._path)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring malformed save index %s", self._path)
            return []
        return [d for d in data if isinstance(d, dict)]

    def _write(self, records: list[dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(records, indent=2), encoding="utf-8")
        tmp.replace(self._path)

    def list_saved(self) -> list[ParadeState]:
        """Saved parades, newest first."""
        with self._lock:
            records = self._read()
        return [ParadeState.from_dict(r) for r in records]

    def load(self, parade_id: str) -> ParadeState:
        with self._lock:
            records = self._read()
        for r in records:
            if (r.get("config") or {}).get("id") == parade_id:
                return ParadeState.from_dict(r)
        raise ParadeNotFoundError(parade_id)

    def save(self, state: ParadeState) -> None:
        record = state.to_dict()
        parade_id = state.config.id
        with self._lock:
            records = self._read()
            for i, r in enumerate(records):
                if (r.get("config") or {}).get("id") == parade_id:
                    records[i] = record
                    break
            else:
                records.insert(0, record)
                if len(records) > self._max_slots:
                    dropped = records.pop()
                    logger.info("Save slots full, dropped parade %s", (dropped.get("config") or {}).get("id"))
            self._write(records)
        logger.info("Saved parade %s (%s)", parade_id, state.config.title)

    def delete(self, parade_id: str) -> None:
        with self._lock:
            records = self._read()
            kept = [r for r in records if (r.get("config") or {}).get("id") != parade_id]
            if len(kept) == len(records):
                raise ParadeNotFoundError(parade_id)
            self._write(kept)
        logger.info("Deleted parade %s", parade_id)
