"""Mood-to-workout matching.

A workout is recommended for a mood purely by set membership in its
``recommended_moods``. There is no ranking: all matches are equally
recommended and keep catalog order.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Union

from fitu_engine.config import MOOD_TTL_MINUTES
from fitu_engine.models.enums import Mood, WorkoutType
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.workout import Workout

ALL_FILTER = "all"
RECOMMENDED_FILTER = "recommended"

WorkoutFilter = Union[str, WorkoutType]


def is_recommended(workout: Workout, mood: Mood | None) -> bool:
    """True if *workout* lists *mood* among its recommended moods."""
    return mood is not None and mood in workout.recommended_moods


def recommend_for(mood: Mood, catalog: Iterable[Workout]) -> tuple[Workout, ...]:
    """All catalog workouts recommended for *mood*, in catalog order."""
    return tuple(w for w in catalog if is_recommended(w, mood))


def filter_workouts(
    catalog: Iterable[Workout],
    workout_filter: WorkoutFilter = ALL_FILTER,
    mood: Mood | None = None,
) -> tuple[Workout, ...]:
    """Apply a workout-selection filter.

    Args:
        catalog: Workouts in catalog order.
        workout_filter: ``"all"``, ``"recommended"`` or a workout type
            (enum member or its value).
        mood: Current mood; ``"recommended"`` matches nothing without one.

    Returns:
        Matching workouts in catalog order.
    """
    if workout_filter == ALL_FILTER:
        return tuple(catalog)
    if workout_filter == RECOMMENDED_FILTER:
        return tuple(w for w in catalog if is_recommended(w, mood))
    workout_type = WorkoutType(workout_filter)
    return tuple(w for w in catalog if w.workout_type == workout_type)


def is_mood_fresh(
    entry: MoodEntry,
    now: datetime,
    ttl_minutes: int = MOOD_TTL_MINUTES,
) -> bool:
    """Whether a logged mood is recent enough to drive recommendations."""
    return now - entry.timestamp <= timedelta(minutes=ttl_minutes)
