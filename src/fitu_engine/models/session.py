"""Workout session records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fitu_engine.models.mood import MoodEntry


@dataclass(frozen=True)
class WorkoutSession:
    """One attempt at a catalog workout.

    Created open (``completed=False``, no ``end_time``) when the workout
    starts and finalized in the store when it completes. ``mood_before`` and
    ``mood_after`` are embedded copies, not references. ``abandoned`` marks
    an open session that was closed without completing.
    """

    id: str
    workout_id: str
    start_time: datetime
    end_time: datetime | None = None
    completed: bool = False
    mood_before: MoodEntry | None = None
    mood_after: MoodEntry | None = None
    exercises_completed: tuple[str, ...] = field(default_factory=tuple)
    abandoned: bool = False

    @property
    def is_open(self) -> bool:
        return not self.completed and self.end_time is None
