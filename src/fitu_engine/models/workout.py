"""Workout catalog models — workouts and their exercises.

Exercise timing is a tagged variant: an exercise is either held for a
fixed number of seconds or performed as sets of reps. Rep-based exercises
still need a countdown, so they carry an explicit fallback duration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from fitu_engine.config import REP_FALLBACK_SECONDS
from fitu_engine.models.enums import Mood, WorkoutType


@dataclass(frozen=True)
class Timed:
    """Hold or repeat the movement for a fixed time."""

    seconds: int


@dataclass(frozen=True)
class RepBased:
    """Perform ``sets`` x ``reps``; the countdown runs ``fallback_seconds``."""

    sets: int
    reps: int
    fallback_seconds: int = REP_FALLBACK_SECONDS


ExerciseTiming = Union[Timed, RepBased]


@dataclass(frozen=True)
class Exercise:
    """One step of a workout."""

    id: str
    name: str
    timing: ExerciseTiming
    rest_time_s: int = 0

    @property
    def countdown_seconds(self) -> int:
        """Seconds on the clock while this exercise is active."""
        if isinstance(self.timing, Timed):
            return self.timing.seconds
        if isinstance(self.timing, RepBased):
            return self.timing.fallback_seconds
        raise TypeError(f"Unknown exercise timing: {self.timing!r}")

    @property
    def label(self) -> str:
        """Short prescription label, e.g. '3 x 12' or 'Timed'."""
        if isinstance(self.timing, RepBased):
            return f"{self.timing.sets} x {self.timing.reps}"
        return "Timed"


@dataclass(frozen=True)
class Workout:
    """Static catalog entry. Sessions reference it by id."""

    id: str
    name: str
    workout_type: WorkoutType
    duration_min: int
    exercises: tuple[Exercise, ...] = field(default_factory=tuple)
    mood_based: bool = True
    recommended_moods: frozenset[Mood] = field(default_factory=frozenset)

    @property
    def exercise_ids(self) -> tuple[str, ...]:
        return tuple(e.id for e in self.exercises)
