"""Tests for ParadeStore — save slots in a JSON index file."""

import json
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from paradesim.core.errors import ParadeNotFoundError
from paradesim.utils.storage import INDEX_FILE, ParadeStore
from tests.helpers.parade_builder import ParadeBuilder


def _parade(pid: str, title: str = "Parade"):
    return (
        ParadeBuilder(title=title, parade_id=pid)
        .entity("pc", x=1, y=2)
        .block("alpha", rows=1, cols=2)
        .wheel("alpha", "w", 0, 2)
        .build()
    )


class TestParadeStore:
    def test_empty_directory(self, tmp_path):
        assert ParadeStore(tmp_path).list_saved() == []

    def test_save_and_load(self, tmp_path):
        store = ParadeStore(tmp_path)
        state = _parade("p1")
        store.save(state)
        assert (tmp_path / INDEX_FILE).exists()
        assert store.load("p1").to_dict() == state.to_dict()

    def test_newest_first(self, tmp_path):
        store = ParadeStore(tmp_path)
        store.save(_parade("p1"))
        store.save(_parade("p2"))
        assert [s.config.id for s in store.list_saved()] == ["p2", "p1"]

    def test_oldest_dropped_when_full(self, tmp_path):
        store = ParadeStore(tmp_path, max_slots=2)
        for pid in ("p1", "p2", "p3"):
            store.save(_parade(pid))
        assert [s.config.id for s in store.list_saved()] == ["p3", "p2"]
        with pytest.raises(ParadeNotFoundError):
            store.load("p1")

    def test_resave_replaces_in_place(self, tmp_path):
        store = ParadeStore(tmp_path)
        store.save(_parade("p1", "First"))
        store.save(_parade("p2"))
        store.save(_parade("p1", "Renamed"))
        saved = store.list_saved()
        assert [s.config.id for s in saved] == ["p2", "p1"]
        assert saved[1].config.title == "Renamed"

    def test_delete(self, tmp_path):
        store = ParadeStore(tmp_path)
        store.save(_parade("p1"))
        store.delete("p1")
        assert store.list_saved() == []
        with pytest.raises(ParadeNotFoundError):
            store.delete("p1")

    def test_creates_missing_directory(self, tmp_path):
        store = ParadeStore(tmp_path / "nested" / "saves")
        store.save(_parade("p1"))
        assert store.path.exists()

    def test_corrupt_index_reads_as_empty(self, tmp_path):
        (tmp_path / INDEX_FILE).write_text("{not json", encoding="utf-8")
        assert ParadeStore(tmp_path).list_saved() == []

    def test_non_list_index_ignored(self, tmp_path):
        (tmp_path / INDEX_FILE).write_text(json.dumps({"config": {}}), encoding="utf-8")
        assert ParadeStore(tmp_path).list_saved() == []

    def test_file_is_plain_parade_json(self, tmp_path):
        store = ParadeStore(tmp_path)
        store.save(_parade("p1"))
        raw = json.loads((tmp_path / INDEX_FILE).read_text(encoding="utf-8"))
        assert raw[0]["config"]["id"] == "p1"
        assert raw[0]["animation"]["tracks"]["alpha"]["actions"][0]["type"] == "WHEEL"
