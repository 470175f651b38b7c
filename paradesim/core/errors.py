"""Exceptions raised at the edges of the engine (parsing, editing, storage).

The timeline evaluator itself never raises for well-typed input.
"""

from __future__ import annotations


class ParadeError(Exception):
    """Base class for all parade-sim errors."""


class InvalidActionError(ParadeError, ValueError):
    """An action record could not be parsed (unknown type, bad shape)."""


class UnknownOwnerError(ParadeError, KeyError):
    """No entity or group carries the requested owner id."""


class UnknownActionError(ParadeError, KeyError):
    """No track holds an action with the requested id."""


class ActionOverlapError(ParadeError):
    """An edit would make two actions on one track overlap in time."""

    def __init__(self, action_id: str, other_id: str) -> None:
        super().__init__(f"Action {action_id!r} would overlap {other_id!r}")
        self.action_id = action_id
        self.other_id = other_id


class ParadeNotFoundError(ParadeError, KeyError):
    """No saved parade with the requested id."""
