"""Engine layer: timeline evaluation, scheduling, editing, path trace, playback."""

from paradesim.engine.entity_track import evaluate_entity
from paradesim.engine.group_track import evaluate_group
from paradesim.engine.playback import Frame, PlaybackClock
from paradesim.engine.schedule import DEFAULT_EPSILON, active_steps, sort_actions
from paradesim.engine.timeline import evaluate

__all__ = [
    "DEFAULT_EPSILON",
    "Frame",
    "PlaybackClock",
    "active_steps",
    "evaluate",
    "evaluate_entity",
    "evaluate_group",
    "sort_actions",
]
