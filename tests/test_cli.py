"""Tests for the command-line entry point and logging setup."""

import json
import logging
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from paradesim.__main__ import main
from paradesim.utils.logging import PER_FRAME_LOGGERS, setup_logging
from tests.helpers.parade_builder import ParadeBuilder


@pytest.fixture(autouse=True)
def _reset_root_logger():
    yield
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)
    for name in PER_FRAME_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def parade_file(tmp_path):
    state = (
        ParadeBuilder(duration=4, parade_id="cli")
        .entity("e1")
        .turn("e1", "t", 0, 2, 90)
        .build()
    )
    path = tmp_path / "parade.json"
    path.write_text(json.dumps(state.to_dict()), encoding="utf-8")
    return path


def test_eval_prints_frame(parade_file, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["paradesim", "eval", str(parade_file), "--time", "1"])
    main()
    out = json.loads(capsys.readouterr().out)
    assert out["time"] == 1.0
    assert out["entities"][0]["rotation"] == 45.0
    assert len(out["digest"]) == 16


def test_eval_from_save_index(parade_file, tmp_path, monkeypatch, capsys):
    index = tmp_path / "parades.json"
    index.write_text("[" + parade_file.read_text(encoding="utf-8") + "]", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["paradesim", "eval", str(index), "--parade", "cli", "--time", "2"])
    main()
    assert json.loads(capsys.readouterr().out)["entities"][0]["rotation"] == 90.0


def test_bench_reports(parade_file, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["paradesim", "bench", str(parade_file), "--frames", "5"])
    main()
    assert "5 frames" in capsys.readouterr().out


class TestLogging:
    def test_level_applied(self):
        setup_logging("DEBUG", frame_debug=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger(PER_FRAME_LOGGERS[0]).level == logging.DEBUG

    def test_per_frame_loggers_capped(self):
        setup_logging("DEBUG")
        assert logging.getLogger(PER_FRAME_LOGGERS[0]).level == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_eval_frame_debug_flag(self, parade_file, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "paradesim", "eval", str(parade_file), "--log-level", "DEBUG", "--frame-debug",
        ])
        main()
        capsys.readouterr()
        assert logging.getLogger(PER_FRAME_LOGGERS[0]).level == logging.DEBUG
