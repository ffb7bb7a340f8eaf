"""Data models for the fitness engine."""

from fitu_engine.models.analytics import (
    AnalyticsReport,
    CategoryCount,
    DayProgress,
    FailureBreakdown,
    MonthlyConsistency,
    MoodCount,
    MoodDistribution,
    MoodPerformance,
    MoodPerformanceReport,
)
from fitu_engine.models.enums import FailureCategory, Mood, WorkoutType
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.stats import UserStats
from fitu_engine.models.workout import Exercise, ExerciseTiming, RepBased, Timed, Workout

__all__ = [
    "AnalyticsReport",
    "CategoryCount",
    "DayProgress",
    "Exercise",
    "ExerciseTiming",
    "FailureBreakdown",
    "FailureCategory",
    "FailureEntry",
    "MonthlyConsistency",
    "Mood",
    "MoodCount",
    "MoodDistribution",
    "MoodEntry",
    "MoodPerformance",
    "MoodPerformanceReport",
    "RepBased",
    "Timed",
    "UserStats",
    "Workout",
    "WorkoutSession",
    "WorkoutType",
]
