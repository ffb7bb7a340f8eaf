"""Workout catalog — the static reference workouts and their storage.

The default catalog is seeded into the store on first run. It is never
mutated by user actions; sessions only reference workouts by id.
"""

from __future__ import annotations

import logging

from fitu_storage import FituStorageError, KeyValueStore

from fitu_engine.event_store import load_json, read_json, save_json
from fitu_engine.models.enums import Mood, WorkoutType
from fitu_engine.models.workout import Exercise, RepBased, Timed, Workout
from fitu_engine.serialization import DECODE_ERRORS, workout_from_dict, workout_to_dict

logger = logging.getLogger(__name__)

WORKOUTS_KEY = "fitu_workouts"


def _timed(exercise_id: str, name: str, seconds: int, rest: int) -> Exercise:
    return Exercise(id=exercise_id, name=name, timing=Timed(seconds), rest_time_s=rest)


def _reps(exercise_id: str, name: str, sets: int, reps: int, rest: int) -> Exercise:
    return Exercise(id=exercise_id, name=name, timing=RepBased(sets, reps), rest_time_s=rest)


DEFAULT_WORKOUTS: tuple[Workout, ...] = (
    Workout(
        id="w1",
        name="Morning Energy Boost",
        workout_type=WorkoutType.HIIT,
        duration_min=20,
        recommended_moods=frozenset({Mood.ENERGIZED, Mood.MOTIVATED}),
        exercises=(
            _timed("e1", "Jumping Jacks", 45, 15),
            _timed("e2", "High Knees", 45, 15),
            _reps("e3", "Burpees", 3, 10, 30),
            _timed("e4", "Mountain Climbers", 45, 15),
            _reps("e5", "Squat Jumps", 3, 12, 30),
        ),
    ),
    Workout(
        id="w2",
        name="Gentle Recovery Flow",
        workout_type=WorkoutType.RECOVERY,
        duration_min=25,
        recommended_moods=frozenset({Mood.TIRED, Mood.STRESSED}),
        exercises=(
            _timed("e6", "Cat-Cow Stretch", 60, 10),
            _timed("e7", "Child Pose", 90, 10),
            _timed("e8", "Gentle Twist", 60, 10),
            _timed("e9", "Hip Opener", 90, 10),
            _timed("e10", "Savasana", 180, 0),
        ),
    ),
    Workout(
        id="w3",
        name="Strength Foundation",
        workout_type=WorkoutType.STRENGTH,
        duration_min=35,
        recommended_moods=frozenset({Mood.MOTIVATED, Mood.ENERGIZED, Mood.CALM}),
        exercises=(
            _reps("e11", "Push-ups", 3, 12, 45),
            _reps("e12", "Bodyweight Squats", 3, 15, 45),
            _timed("e13", "Plank Hold", 45, 30),
            _reps("e14", "Lunges", 3, 10, 45),
            _reps("e15", "Glute Bridges", 3, 15, 30),
        ),
    ),
    Workout(
        id="w4",
        name="Mindful Movement",
        workout_type=WorkoutType.FLEXIBILITY,
        duration_min=30,
        recommended_moods=frozenset({Mood.CALM, Mood.STRESSED, Mood.TIRED}),
        exercises=(
            _timed("e16", "Deep Breathing", 120, 10),
            _timed("e17", "Standing Forward Fold", 60, 10),
            _timed("e18", "Warrior Sequence", 180, 20),
            _timed("e19", "Pigeon Pose", 90, 10),
            _timed("e20", "Seated Meditation", 180, 0),
        ),
    ),
    Workout(
        id="w5",
        name="Cardio Burn",
        workout_type=WorkoutType.CARDIO,
        duration_min=25,
        recommended_moods=frozenset({Mood.ENERGIZED, Mood.MOTIVATED}),
        exercises=(
            _timed("e21", "Warm-up Jog in Place", 120, 20),
            _timed("e22", "Speed Skaters", 45, 15),
            _timed("e23", "Box Steps", 60, 20),
            _timed("e24", "Lateral Shuffles", 45, 15),
            _timed("e25", "Cool Down Walk", 120, 0),
        ),
    ),
)


class WorkoutCatalog:
    """Read-only access to the stored workout catalog."""

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def seed_if_absent(self) -> None:
        """Write the default catalog once; an existing catalog is left alone."""
        try:
            existing = read_json(self._kv, WORKOUTS_KEY, None)
        except FituStorageError as exc:
            logger.warning("Skipping catalog seed, read failed: %s", exc)
            return
        if existing is None:
            if save_json(self._kv, WORKOUTS_KEY, [workout_to_dict(w) for w in DEFAULT_WORKOUTS]):
                logger.info("Seeded default catalog with %d workouts", len(DEFAULT_WORKOUTS))

    def all(self) -> tuple[Workout, ...]:
        """All workouts in catalog order. Falls back to the defaults on read failure."""
        rows = load_json(self._kv, WORKOUTS_KEY, None)
        if not isinstance(rows, list):
            return DEFAULT_WORKOUTS
        try:
            return tuple(workout_from_dict(row) for row in rows)
        except DECODE_ERRORS as exc:
            logger.warning("Stored catalog is invalid, using defaults: %s", exc)
            return DEFAULT_WORKOUTS

    def get(self, workout_id: str) -> Workout | None:
        for workout in self.all():
            if workout.id == workout_id:
                return workout
        return None

    def by_type(self, workout_type: WorkoutType) -> tuple[Workout, ...]:
        return tuple(w for w in self.all() if w.workout_type == workout_type)
