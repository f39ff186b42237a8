from __future__ import annotations

"""Exception types raised by the trial generator and session controller."""


class RelationTrainerError(Exception):
    """Base class for all trainer errors."""


class NoModesEnabledError(RelationTrainerError):
    """A trial was requested while every mode is disabled."""


class InvalidTransitionError(RelationTrainerError):
    """An input arrived in a phase that does not accept it."""

    def __init__(self, action: str, phase: str) -> None:
        super().__init__(f"'{action}' is not accepted in phase {phase}")
        self.action = action
        self.phase = phase


class ConfigLockedError(RelationTrainerError):
    """Configuration was mutated while a round was in flight."""


class DegenerateGeometryError(RelationTrainerError):
    """Spatial construction could not produce an unambiguous relation."""
