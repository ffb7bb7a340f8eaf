"""Missed-workout log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fitu_engine.models.enums import FailureCategory


@dataclass(frozen=True)
class FailureEntry:
    """A logged missed workout. Immutable once stored."""

    id: str
    date: datetime
    reason: str
    category: FailureCategory
    notes: str | None = None
    scheduled_workout_id: str | None = None
