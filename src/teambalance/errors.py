"""Exceptions raised while generating balanced squads."""

from __future__ import annotations


class TeamBalanceError(Exception):
    """Base class for team generation failures."""

    retryable = False


class InvalidRosterError(TeamBalanceError):
    """Roster is too small or contains malformed signups."""


class EngineUnavailableError(TeamBalanceError):
    """The reasoning service could not be reached (timeout, transport, auth)."""

    retryable = True


class MalformedResponseError(TeamBalanceError):
    """The reasoning service replied with something that is not the expected JSON."""

    retryable = True

    def __init__(self, message: str, raw_text: str | None = None):
        super().__init__(message)
        self.raw_text = raw_text


class InconsistentAssignmentError(TeamBalanceError):
    """Parsed output violates the partition (a player placed more than once)."""

    def __init__(self, message: str, player_ids: tuple[str, ...] = ()):
        super().__init__(message)
        self.player_ids = player_ids


__all__ = [
    "TeamBalanceError",
    "InvalidRosterError",
    "EngineUnavailableError",
    "MalformedResponseError",
    "InconsistentAssignmentError",
]
