"""FastAPI dependency injection — provides the clock, store and config singletons."""

from __future__ import annotations

from dataclasses import dataclass

from paradesim.config import EngineConfig
from paradesim.engine.playback import PlaybackClock
from paradesim.utils.storage import ParadeStore


@dataclass(frozen=True, slots=True)
class Services:
    config: EngineConfig
    clock: PlaybackClock
    store: ParadeStore


_services: Services | None = None


def set_services(services: Services | None) -> None:
    global _services
    _services = services


def get_services() -> Services:
    if _services is None:
        raise RuntimeError("Services not initialized — server not started correctly.")
    return _services


def get_clock() -> PlaybackClock:
    return get_services().clock


def get_store() -> ParadeStore:
    return get_services().store


def get_config() -> EngineConfig:
    return get_services().config
