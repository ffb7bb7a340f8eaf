"""FitnessTracker — the facade the presentation layer calls into."""

from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from fitu_storage import JsonFileKeyValueStore, KeyValueStore

from fitu_engine.analytics.report import build_report
from fitu_engine.catalog import WorkoutCatalog
from fitu_engine.clock import Clock, now_local
from fitu_engine.config import DATA_PATH, MOOD_TTL_MINUTES, WEEKLY_GOAL
from fitu_engine.event_store import EventKind, EventStore
from fitu_engine.exceptions import FituError
from fitu_engine.models.analytics import AnalyticsReport
from fitu_engine.models.enums import FAILURE_REASON_TITLES, FailureCategory, Mood, WorkoutType
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.stats import UserStats
from fitu_engine.models.workout import Workout
from fitu_engine.recommendation.matcher import (
    ALL_FILTER,
    filter_workouts,
    is_mood_fresh,
    recommend_for,
)
from fitu_engine.session.controller import SessionController, SessionState
from fitu_engine.session.ticker import SessionTicker
from fitu_engine.stats.aggregator import StatsAggregator

logger = logging.getLogger(__name__)


class FitnessTracker:
    """Wires the store, catalog, stats, controller and analytics together.

    Caller-contract violations (unknown workout, completing with nothing in
    progress, …) are logged and answered with None; they never touch the
    stats. Storage failures are absorbed further down, in the event store.

    Usage:
        tracker = FitnessTracker(InMemoryKeyValueStore())
        tracker.log_mood("energized", 4)
        workouts = tracker.get_recommendations()
        tracker.start_session(workouts[0].id)
        tracker.complete_session()
        stats = tracker.get_stats()
    """

    def __init__(
        self,
        kv: KeyValueStore,
        clock: Clock = now_local,
        auto_tick: bool = False,
        scheduler: BackgroundScheduler | None = None,
        mood_ttl_minutes: int = MOOD_TTL_MINUTES,
        weekly_goal: int = WEEKLY_GOAL,
    ) -> None:
        self._clock = clock
        self._mood_ttl_minutes = mood_ttl_minutes
        self._weekly_goal = weekly_goal
        self._auto_tick = auto_tick
        self._scheduler = scheduler

        self.store = EventStore(kv)
        self.catalog = WorkoutCatalog(kv)
        self.aggregator = StatsAggregator(kv)
        self.catalog.seed_if_absent()

        self.controller = SessionController(self.store, self.catalog, self.aggregator, clock)
        self._ticker = self._make_ticker()

    @classmethod
    def from_config(cls, **kwargs) -> FitnessTracker:
        """Tracker persisted to the JSON file at ``FITU_DATA_PATH``."""
        return cls(JsonFileKeyValueStore(DATA_PATH), **kwargs)

    # ------------------------------------------------------------------
    # Mood
    # ------------------------------------------------------------------

    def log_mood(
        self, mood: Mood | str, intensity: int, workout_id: str | None = None
    ) -> MoodEntry:
        """Record a mood check-in and make it the current mood.

        Raises:
            ValueError: unknown mood or intensity outside 1-5.
        """
        entry = MoodEntry(
            id="",
            mood=Mood(mood),
            intensity=int(intensity),
            timestamp=self._clock(),
            workout_id=workout_id,
        )
        stored = self.store.append(EventKind.MOOD_ENTRIES, entry)
        self.store.set_current_mood(stored)
        logger.info("Logged mood %s (intensity %d)", stored.mood.value, stored.intensity)
        return stored

    def current_mood(self) -> MoodEntry | None:
        """The most recent mood, or None once it is older than the mood TTL."""
        entry = self.store.get_current_mood()
        if entry is None:
            return None
        if not is_mood_fresh(entry, self._clock(), self._mood_ttl_minutes):
            logger.debug("Current mood %s is stale, ignoring", entry.id)
            return None
        return entry

    # ------------------------------------------------------------------
    # Catalog and recommendations
    # ------------------------------------------------------------------

    def get_recommendations(self, mood: Mood | str | None = None) -> tuple[Workout, ...]:
        """Workouts recommended for *mood*, defaulting to the current mood."""
        if mood is None:
            current = self.current_mood()
            if current is None:
                return ()
            mood = current.mood
        return recommend_for(Mood(mood), self.catalog.all())

    def workouts(self, workout_filter: str | WorkoutType = ALL_FILTER) -> tuple[Workout, ...]:
        """Catalog filtered by ``"all"``, ``"recommended"`` or a workout type."""
        current = self.current_mood()
        return filter_workouts(
            self.catalog.all(), workout_filter, current.mood if current else None
        )

    # ------------------------------------------------------------------
    # Live session
    # ------------------------------------------------------------------

    @property
    def session_state(self) -> SessionState:
        return self.controller.state

    def start_session(self, workout_id: str) -> WorkoutSession | None:
        """Start a workout, snapshotting the current mood into the session."""
        try:
            session = self.controller.start(workout_id, mood_before=self.current_mood())
        except FituError as exc:
            logger.warning("Cannot start session: %s", exc)
            return None
        if self._ticker is not None:
            self._ticker.start()
        return session

    def tick_session(self) -> SessionState:
        return self.controller.tick()

    def advance_session(self) -> SessionState | None:
        return self._guarded("advance", self.controller.advance)

    def pause_session(self) -> SessionState | None:
        return self._guarded("pause", self.controller.pause)

    def resume_session(self) -> SessionState | None:
        return self._guarded("resume", self.controller.resume)

    def complete_session(self, mood_after: MoodEntry | None = None) -> WorkoutSession | None:
        """Finalize the running session and update stats exactly once."""
        self._stop_ticker()
        try:
            return self.controller.complete(mood_after)
        except FituError as exc:
            logger.warning("Cannot complete session: %s", exc)
            return None

    def quit_session(self) -> SessionState | None:
        """Abort the running workout; its record stays open."""
        self._stop_ticker()
        return self._guarded("quit", self.controller.quit)

    # ------------------------------------------------------------------
    # Failures
    # ------------------------------------------------------------------

    def log_failure(
        self,
        category: FailureCategory | str,
        notes: str | None = None,
        reason: str | None = None,
        scheduled_workout_id: str | None = None,
    ) -> FailureEntry:
        """Record a missed workout and update stats.

        Raises:
            ValueError: unknown category.
        """
        category = FailureCategory(category)
        notes = notes.strip() if notes else None
        entry = FailureEntry(
            id="",
            date=self._clock(),
            reason=reason or FAILURE_REASON_TITLES[category],
            category=category,
            notes=notes or None,
            scheduled_workout_id=scheduled_workout_id,
        )
        stored = self.store.append(EventKind.FAILURE_ENTRIES, entry)
        self.aggregator.record_failure()
        return stored

    # ------------------------------------------------------------------
    # Stats and analytics
    # ------------------------------------------------------------------

    def get_stats(self) -> UserStats:
        return self.aggregator.current()

    def rebuild_stats(self) -> UserStats:
        """Recompute stats from the full event history."""
        return self.aggregator.rebuild(
            self.store.sessions(), self.store.failures(), self._duration_for
        )

    def get_analytics(self) -> AnalyticsReport:
        return build_report(
            stats=self.get_stats(),
            entries=self.store.mood_entries(),
            sessions=self.store.sessions(),
            failures=self.store.failures(),
            now=self._clock(),
            weekly_goal=self._weekly_goal,
        )

    def clear_data(self) -> None:
        """Erase all history and stats; the default catalog is reseeded."""
        self.close()
        self.store.clear()
        self.catalog.seed_if_absent()
        self.controller = SessionController(self.store, self.catalog, self.aggregator, self._clock)
        self._ticker = self._make_ticker()
        logger.info("Cleared all tracker data")

    def close(self) -> None:
        """Release the background scheduler, if any."""
        if self._ticker is not None:
            self._ticker.shutdown()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _make_ticker(self) -> SessionTicker | None:
        if not self._auto_tick:
            return None
        return SessionTicker(self.controller, scheduler=self._scheduler)

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()

    def _guarded(self, action: str, fn) -> SessionState | None:
        try:
            return fn()
        except FituError as exc:
            logger.warning("Cannot %s session: %s", action, exc)
            return None

    def _duration_for(self, workout_id: str) -> int | None:
        workout = self.catalog.get(workout_id)
        return workout.duration_min if workout else None
