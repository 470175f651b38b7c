"""Engine configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for the engine, playback clock and server."""

    # Evaluation
    duration_epsilon: float = 1e-3        # Zero/negative durations are stretched to this

    # Playback
    frame_rate: float = 60.0              # Frames per second of the playback clock
    playback_speed: float = 1.0           # Timeline seconds per wall-clock second

    # Path trace
    trace_samples: int = 16               # Polyline points per MOVE / WHEEL action

    # Storage
    storage_dir: str = "saves"
    max_save_slots: int = 3

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    frame_debug: bool = False             # Let per-frame loggers go below INFO
