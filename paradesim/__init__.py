"""Parade ground planner — timeline evaluation engine and playback server."""

__version__ = "0.1.0"

from paradesim.core.parade import ParadeState
from paradesim.core.snapshot import Snapshot
from paradesim.engine.timeline import evaluate

__all__ = ["ParadeState", "Snapshot", "evaluate", "__version__"]
