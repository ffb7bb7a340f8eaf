"""Custom exception hierarchy for fitu_engine."""

from __future__ import annotations


class FituError(Exception):
    """Base exception for all fitu_engine errors."""


class ReferenceNotFound(FituError):
    """An operation referenced a workout id absent from the catalog."""

    def __init__(self, message: str, reference_id: str | None = None) -> None:
        super().__init__(message)
        self.reference_id = reference_id


class InvalidState(FituError):
    """An operation was called in a state that does not allow it.

    E.g. completing a session when none is open, or starting a second
    session while one is still running.
    """
