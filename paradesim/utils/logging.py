"""Logging configuration for the CLI and the API server."""

from __future__ import annotations

import logging
import sys

# Loggers that fire on every evaluated frame (60 per second during playback).
PER_FRAME_LOGGERS = ("paradesim.engine.timeline",)


def setup_logging(level: str = "INFO", frame_debug: bool = False) -> None:
    """Send everything to stdout with one format.

    Per-frame loggers stay at INFO even when *level* is DEBUG unless
    *frame_debug* is set, otherwise playback floods the console.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in PER_FRAME_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level if frame_debug else max(numeric_level, logging.INFO))
