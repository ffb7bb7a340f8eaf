"""Shared test fixtures: in-memory stores, a controllable clock, sample records."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator

import pytest

from fitu_engine.catalog import WORKOUTS_KEY, WorkoutCatalog
from fitu_engine.event_store import EventStore
from fitu_engine.models.enums import FailureCategory, Mood, WorkoutType
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.workout import Exercise, RepBased, Timed, Workout
from fitu_engine.serialization import to_json_string, workout_to_dict
from fitu_engine.stats.aggregator import StatsAggregator
from fitu_engine.tracker import FitnessTracker
from fitu_storage import InMemoryKeyValueStore, StorageUnavailable

UTC = timezone.utc


class FakeClock:
    """Callable clock that only moves when a test tells it to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Wednesday 2025-01-15 10:00 UTC."""
    return FakeClock(datetime(2025, 1, 15, 10, 0, tzinfo=UTC))


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def fail_next_read(kv) -> Callable[[], None]:
    """Make the next ``kv.get`` raise StorageUnavailable; later reads succeed.

    Usage:
        fail_next_read()
        store.append(...)  # sees the failed read
    """
    real_get = kv.get

    def _arm() -> None:
        def _get(key: str):
            kv.get = real_get
            raise StorageUnavailable("backend busy", key=key)

        kv.get = _get

    return _arm


@pytest.fixture
def store(kv) -> EventStore:
    return EventStore(kv)


@pytest.fixture
def catalog(kv) -> WorkoutCatalog:
    c = WorkoutCatalog(kv)
    c.seed_if_absent()
    return c


@pytest.fixture
def aggregator(kv) -> StatsAggregator:
    return StatsAggregator(kv)


@pytest.fixture
def tracker(kv, clock) -> FitnessTracker:
    return FitnessTracker(kv, clock=clock)


@pytest.fixture
def five_step_workout() -> Workout:
    """5 exercises; only the last one has a rest period."""
    return Workout(
        id="t5",
        name="Five Step Test",
        workout_type=WorkoutType.STRENGTH,
        duration_min=15,
        recommended_moods=frozenset({Mood.MOTIVATED}),
        exercises=(
            Exercise(id="x1", name="Squats", timing=Timed(3)),
            Exercise(id="x2", name="Push-ups", timing=RepBased(3, 10, fallback_seconds=2)),
            Exercise(id="x3", name="Plank", timing=Timed(2)),
            Exercise(id="x4", name="Lunges", timing=Timed(2)),
            Exercise(id="x5", name="Bridge", timing=Timed(2), rest_time_s=2),
        ),
    )


@pytest.fixture
def custom_kv(kv, five_step_workout) -> InMemoryKeyValueStore:
    """Store whose catalog holds only the five-step workout."""
    kv.set(WORKOUTS_KEY, to_json_string([workout_to_dict(five_step_workout)]))
    return kv


# ---------------------------------------------------------------------------
# Local time zone
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def local_timezone(monkeypatch) -> Iterator[Callable[[str], None]]:
    """Pin the process-local time zone to UTC for every test.

    Usage:
        local_timezone("America/New_York")
    """

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    _set("UTC")
    yield _set
    monkeypatch.undo()
    time.tzset()


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


@pytest.fixture
def mood_factory() -> Callable[..., MoodEntry]:
    """Factory fixture for MoodEntry records.

    Usage:
        entry = mood_factory(Mood.CALM, at, workout_id="w1")
    """

    def _make(
        mood: Mood,
        at: datetime,
        workout_id: str | None = None,
        intensity: int = 3,
        entry_id: str = "m",
    ) -> MoodEntry:
        return MoodEntry(
            id=entry_id, mood=mood, intensity=intensity, timestamp=at, workout_id=workout_id
        )

    return _make


@pytest.fixture
def session_factory() -> Callable[..., WorkoutSession]:
    """Factory fixture for WorkoutSession records; completed ones last 20 minutes.

    Usage:
        session = session_factory("w1", start, completed=False)
    """

    def _make(
        workout_id: str,
        start: datetime,
        completed: bool = True,
        session_id: str = "s",
        minutes: int = 20,
    ) -> WorkoutSession:
        return WorkoutSession(
            id=session_id,
            workout_id=workout_id,
            start_time=start,
            end_time=start + timedelta(minutes=minutes) if completed else None,
            completed=completed,
        )

    return _make


@pytest.fixture
def failure_factory() -> Callable[..., FailureEntry]:
    """Factory fixture for FailureEntry records."""

    def _make(category: FailureCategory, at: datetime, entry_id: str = "f") -> FailureEntry:
        return FailureEntry(id=entry_id, date=at, reason="", category=category)

    return _make
