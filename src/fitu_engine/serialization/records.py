"""JSON-compatible dict serialization for stored records.

Field names follow the stored camelCase layout (``workoutId``,
``startTime``, ``restTime`` …) so existing data stays readable. All
functions are pure (no I/O). Decoders raise ``KeyError``, ``ValueError``
or ``TypeError`` on malformed input; :data:`DECODE_ERRORS` collects them
for callers that recover.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from fitu_engine.config import REP_FALLBACK_SECONDS
from fitu_engine.models.enums import FailureCategory, Mood, WorkoutType
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.stats import UserStats
from fitu_engine.models.workout import Exercise, RepBased, Timed, Workout

DECODE_ERRORS = (KeyError, ValueError, TypeError)


def _dt_to_str(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as local time."""
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def _opt_dt(value: Any) -> datetime | None:
    return parse_datetime(value) if value else None


# ---------------------------------------------------------------------------
# Mood entries
# ---------------------------------------------------------------------------


def mood_entry_to_dict(entry: MoodEntry) -> dict:
    result: dict[str, Any] = {
        "id": entry.id,
        "mood": entry.mood.value,
        "intensity": entry.intensity,
        "timestamp": _dt_to_str(entry.timestamp),
    }
    if entry.workout_id is not None:
        result["workoutId"] = entry.workout_id
    return result


def mood_entry_from_dict(data: dict) -> MoodEntry:
    return MoodEntry(
        id=str(data["id"]),
        mood=Mood(data["mood"]),
        intensity=int(data["intensity"]),
        timestamp=parse_datetime(data["timestamp"]),
        workout_id=data.get("workoutId"),
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def exercise_to_dict(exercise: Exercise) -> dict:
    result: dict[str, Any] = {"id": exercise.id, "name": exercise.name}
    timing = exercise.timing
    if isinstance(timing, Timed):
        result["duration"] = timing.seconds
    else:
        result["sets"] = timing.sets
        result["reps"] = timing.reps
        if timing.fallback_seconds != REP_FALLBACK_SECONDS:
            result["duration"] = timing.fallback_seconds
    result["restTime"] = exercise.rest_time_s
    return result


def exercise_from_dict(data: dict) -> Exercise:
    """Decode an exercise, resolving its timing variant.

    ``sets``/``reps`` make it rep-based (``duration``, when also present,
    becomes the countdown); ``duration`` alone makes it timed. An exercise
    with neither has no countdown and is rejected.
    """
    sets, reps, duration = data.get("sets"), data.get("reps"), data.get("duration")
    if sets and reps:
        timing: Timed | RepBased = RepBased(
            sets=int(sets),
            reps=int(reps),
            fallback_seconds=int(duration) if duration else REP_FALLBACK_SECONDS,
        )
    elif duration:
        timing = Timed(seconds=int(duration))
    else:
        raise ValueError(f"Exercise {data.get('id')!r} has no timing information")

    rest = int(data.get("restTime", 0))
    if rest < 0:
        raise ValueError(f"Exercise {data.get('id')!r} has negative rest time")

    return Exercise(
        id=str(data["id"]),
        name=str(data["name"]),
        timing=timing,
        rest_time_s=rest,
    )


def workout_to_dict(workout: Workout) -> dict:
    return {
        "id": workout.id,
        "name": workout.name,
        "type": workout.workout_type.value,
        "duration": workout.duration_min,
        "exercises": [exercise_to_dict(e) for e in workout.exercises],
        "moodBased": workout.mood_based,
        # Canonical mood order keeps the stored form stable
        "recommendedMoods": [m.value for m in Mood if m in workout.recommended_moods],
    }


def workout_from_dict(data: dict) -> Workout:
    return Workout(
        id=str(data["id"]),
        name=str(data["name"]),
        workout_type=WorkoutType(data["type"]),
        duration_min=int(data["duration"]),
        exercises=tuple(exercise_from_dict(e) for e in data.get("exercises", [])),
        mood_based=bool(data.get("moodBased", True)),
        recommended_moods=frozenset(Mood(m) for m in data.get("recommendedMoods", [])),
    )


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def session_to_dict(session: WorkoutSession) -> dict:
    result: dict[str, Any] = {
        "id": session.id,
        "workoutId": session.workout_id,
        "startTime": _dt_to_str(session.start_time),
        "completed": session.completed,
        "exercisesCompleted": list(session.exercises_completed),
    }
    if session.end_time is not None:
        result["endTime"] = _dt_to_str(session.end_time)
    if session.mood_before is not None:
        result["moodBefore"] = mood_entry_to_dict(session.mood_before)
    if session.mood_after is not None:
        result["moodAfter"] = mood_entry_to_dict(session.mood_after)
    if session.abandoned:
        result["abandoned"] = True
    return result


def session_from_dict(data: dict) -> WorkoutSession:
    mood_before = data.get("moodBefore")
    mood_after = data.get("moodAfter")
    return WorkoutSession(
        id=str(data["id"]),
        workout_id=str(data["workoutId"]),
        start_time=parse_datetime(data["startTime"]),
        end_time=_opt_dt(data.get("endTime")),
        completed=bool(data.get("completed", False)),
        mood_before=mood_entry_from_dict(mood_before) if mood_before else None,
        mood_after=mood_entry_from_dict(mood_after) if mood_after else None,
        exercises_completed=tuple(data.get("exercisesCompleted", [])),
        abandoned=bool(data.get("abandoned", False)),
    )


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


def failure_to_dict(entry: FailureEntry) -> dict:
    result: dict[str, Any] = {
        "id": entry.id,
        "date": _dt_to_str(entry.date),
        "reason": entry.reason,
        "category": entry.category.value,
    }
    if entry.notes is not None:
        result["notes"] = entry.notes
    if entry.scheduled_workout_id is not None:
        result["scheduledWorkoutId"] = entry.scheduled_workout_id
    return result


def failure_from_dict(data: dict) -> FailureEntry:
    return FailureEntry(
        id=str(data["id"]),
        date=parse_datetime(data["date"]),
        reason=str(data.get("reason", "")),
        category=FailureCategory(data["category"]),
        notes=data.get("notes"),
        scheduled_workout_id=data.get("scheduledWorkoutId"),
    )


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


def stats_to_dict(stats: UserStats) -> dict:
    return {
        "totalWorkouts": stats.total_workouts,
        "currentStreak": stats.current_streak,
        "longestStreak": stats.longest_streak,
        "disciplineScore": stats.discipline_score,
        "totalMinutes": stats.total_minutes,
        "missedWorkouts": stats.missed_workouts,
    }


def stats_from_dict(data: dict) -> UserStats:
    return UserStats(
        total_workouts=int(data["totalWorkouts"]),
        current_streak=int(data["currentStreak"]),
        longest_streak=int(data["longestStreak"]),
        discipline_score=int(data["disciplineScore"]),
        total_minutes=int(data["totalMinutes"]),
        missed_workouts=int(data["missedWorkouts"]),
    )


def to_json_string(payload: Any) -> str:
    """Dump an already-converted payload to a compact JSON string."""
    return json.dumps(payload, separators=(",", ":"))
