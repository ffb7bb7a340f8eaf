"""fitu_engine — mood-adaptive workout tracking core.

Logs moods and missed workouts, runs one live workout session at a time,
keeps discipline and streak stats current, and derives analytics from the
stored history. All persistence goes through a ``fitu_storage`` backend.
"""

from fitu_engine.exceptions import FituError, InvalidState, ReferenceNotFound
from fitu_engine.models import (
    AnalyticsReport,
    FailureCategory,
    FailureEntry,
    Mood,
    MoodEntry,
    UserStats,
    Workout,
    WorkoutSession,
    WorkoutType,
)
from fitu_engine.session import SessionPhase, SessionState
from fitu_engine.tracker import FitnessTracker

__all__ = [
    "AnalyticsReport",
    "FailureCategory",
    "FailureEntry",
    "FitnessTracker",
    "FituError",
    "InvalidState",
    "Mood",
    "MoodEntry",
    "ReferenceNotFound",
    "SessionPhase",
    "SessionState",
    "UserStats",
    "Workout",
    "WorkoutSession",
    "WorkoutType",
]
