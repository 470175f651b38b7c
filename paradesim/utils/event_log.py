"""Thread-safe log of playback lifecycle events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlaybackEvent:
    """One lifecycle event (``loaded``, ``play``, ``pause``, ``seek``, ...)."""

    seq: int
    category: str
    message: str
    timeline_time: float = 0.0  # playhead position when the event happened


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Sequence numbers keep increasing across ``clear()`` so a client polling
    with ``since`` never sees an old number again.
    """

    __slots__ = ("_buffer", "_lock", "_next_seq")

    def __init__(self, maxlen: int = 1000) -> None:
        self._buffer: deque[PlaybackEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._next_seq = 1

    def append(self, category: str, message: str, timeline_time: float = 0.0) -> PlaybackEvent:
        with self._lock:
            event = PlaybackEvent(self._next_seq, category, message, timeline_time)
            self._next_seq += 1
            self._buffer.append(event)
            return event

    def since(self, seq: int) -> list[PlaybackEvent]:
        """Return all events with sequence number >= *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq >= seq]

    def latest(self, count: int = 50) -> list[PlaybackEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
