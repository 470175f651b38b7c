"""PlaybackClock — drives the timeline on a background thread.

The clock owns the playhead and nothing else: every frame is produced by the
pure :func:`evaluate` from the loaded base state, never by advancing the
previous frame, so seeking backwards reproduces earlier frames exactly and a
scrub preview (:meth:`PlaybackClock.frame_at`) matches playback bit for bit.

The API reads the latest :class:`Frame` through an atomically swapped
reference; only the clock thread and the control methods move the playhead.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from paradesim.core.snapshot import Snapshot
from paradesim.engine.timeline import evaluate
from paradesim.systems.digest import frame_digest
from paradesim.utils.event_log import EventLog

if TYPE_CHECKING:
    from paradesim.config import EngineConfig
    from paradesim.core.parade import ParadeState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Frame:
    """One evaluated instant of the timeline."""

    time: float
    snapshot: Snapshot
    digest: str


class NoParadeLoadedError(RuntimeError):
    """A playback control was used before any parade was loaded."""


class PlaybackClock:
    """Frame-driven playback of one parade.

    Thread-safe access to:
      - latest frame (atomic reference swap)
      - event log (lock-guarded)
      - controls (load / play / pause / resume / seek / stop)
    """

    def __init__(self, config: EngineConfig, event_log: EventLog | None = None) -> None:
        self._config = config
        self._event_log = event_log or EventLog()

        self._lock = threading.Lock()
        self._base: ParadeState | None = None
        self._time: float = 0.0
        self._latest_frame: Frame | None = None

        self._thread: threading.Thread | None = None
        self._playing = threading.Event()
        self._stop_requested = threading.Event()

    # -- public properties --

    @property
    def playing(self) -> bool:
        return self._playing.is_set()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def loaded(self) -> bool:
        return self._base is not None

    @property
    def time(self) -> float:
        return self._time

    @property
    def duration(self) -> float:
        base = self._base
        return max(base.animation.duration, 0.0) if base else 0.0

    @property
    def finished(self) -> bool:
        return self.loaded and self._time >= self.duration

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def base(self) -> ParadeState | None:
        return self._base

    # -- frame access --

    def get_frame(self) -> Frame | None:
        with self._lock:
            return self._latest_frame

    def frame_at(self, t: float) -> Frame:
        """Evaluate any instant without moving the playhead (scrub preview)."""
        base = self._require_base()
        return self._make_frame(base, t)

    # -- controls --

    def load(self, state: ParadeState) -> Frame:
        """Swap in a new base state and rewind to 0 (paused)."""
        self._playing.clear()
        with self._lock:
            self._base = state
            self._time = 0.0
        frame = self._publish()
        self._event_log.append("loaded", f"Loaded parade {state.config.title!r}", 0.0)
        logger.info("Loaded parade %s (%d entities, %d tracks)",
                    state.config.id, len(state.entities), len(state.animation.tracks))
        return frame

    def play(self) -> None:
        """Start playing; rewinds first if the playhead is at the end."""
        self._require_base()
        if self.finished:
            with self._lock:
                self._time = 0.0
            self._publish()
        self._playing.set()
        self._event_log.append("play", "Playback started.", self._time)
        logger.info("Playback started at t=%.3f", self._time)

    def pause(self) -> None:
        self._playing.clear()
        self._event_log.append("pause", "Playback paused.", self._time)
        logger.info("Playback paused at t=%.3f", self._time)

    def resume(self) -> None:
        self._require_base()
        if self.finished:
            return
        self._playing.set()
        self._event_log.append("resume", "Playback resumed.", self._time)
        logger.info("Playback resumed at t=%.3f", self._time)

    def seek(self, t: float) -> Frame:
        """Move the playhead to *t*, clamped to ``[0, duration]``."""
        self._require_base()
        with self._lock:
            self._time = min(max(t, 0.0), self.duration)
        frame = self._publish()
        self._event_log.append("seek", f"Seeked to {frame.time:.3f}s.", frame.time)
        return frame

    def advance(self, dt: float) -> Frame | None:
        """Move a playing clock forward by *dt* wall-clock seconds.

        Called by the clock thread every frame; usable directly when no
        thread is running. Stops at the timeline duration.
        """
        if not self._playing.is_set() or self._base is None:
            return None
        with self._lock:
            self._time = min(self._time + dt * self._config.playback_speed, self.duration)
            reached_end = self._time >= self.duration
        frame = self._publish()
        if reached_end:
            self._playing.clear()
            self._event_log.append("finished", "Reached end of timeline.", frame.time)
            logger.info("Playback finished at t=%.3f", frame.time)
        return frame

    # -- lifecycle --

    def start(self) -> None:
        """Start the background clock thread (idempotent)."""
        if self.running:
            return
        self._stop_requested.clear()
        self._thread = threading.Thread(target=self._run_loop, name="playback-clock", daemon=True)
        self._thread.start()
        logger.info("PlaybackClock started (%.1f fps)", self._config.frame_rate)

    def stop(self) -> None:
        self._stop_requested.set()
        self._playing.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._thread = None
        self._event_log.append("stop", "Playback clock stopped.", self._time)
        logger.info("PlaybackClock stopped.")

    # -- internals --

    def _require_base(self) -> ParadeState:
        base = self._base
        if base is None:
            raise NoParadeLoadedError("No parade loaded.")
        return base

    def _make_frame(self, base: ParadeState, t: float) -> Frame:
        snapshot = evaluate(base, t, self._config.duration_epsilon)
        return Frame(time=t, snapshot=snapshot, digest=frame_digest(snapshot))

    def _publish(self) -> Frame:
        with self._lock:
            base = self._base
            t = self._time
        assert base is not None
        frame = self._make_frame(base, t)
        with self._lock:
            self._latest_frame = frame
        return frame

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Clock thread started.")
        interval = 1.0 / max(self._config.frame_rate, 1.0)
        last = time.perf_counter()

        while not self._stop_requested.is_set():
            now = time.perf_counter()
            dt = now - last
            last = now
            if self._playing.is_set():
                self.advance(dt)
            time.sleep(interval)

        logger.info("Clock thread exited.")
