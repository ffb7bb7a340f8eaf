"""Stats aggregation: discipline score, streaks, completion totals.

UserStats is a materialized view over completion and failure events. It is
updated synchronously on every event, so a read immediately after an event
already reflects it. Each trigger rewrites its subset of fields from the
previous record; ``replay_stats`` rebuilds the view from the raw events.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from datetime import datetime
from typing import Callable, Iterable

from fitu_storage import FituStorageError, KeyValueStore

from fitu_engine.event_store import load_json, read_json, save_json
from fitu_engine.models.enums import DEFAULT_DISCIPLINE_SCORE
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.stats import UserStats
from fitu_engine.serialization import DECODE_ERRORS, stats_from_dict, stats_to_dict

logger = logging.getLogger(__name__)

STATS_KEY = "fitu_user_stats"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() rounds halves to even (12.5 -> 12); scores and display
    percentages round halves up (12.5 -> 13).
    """
    return int(math.floor(value + 0.5))


def discipline_score(total_workouts: int, missed_workouts: int) -> int:
    """Percentage of intended workouts actually completed.

    100 for a user with no history.
    """
    denominator = total_workouts + missed_workouts
    if denominator <= 0:
        return DEFAULT_DISCIPLINE_SCORE
    return round_half_up(100.0 * total_workouts / denominator)


def apply_completion(stats: UserStats, duration_min: int) -> UserStats:
    """Stats after one more completed workout of *duration_min* minutes."""
    total = stats.total_workouts + 1
    streak = stats.current_streak + 1
    return dataclasses.replace(
        stats,
        total_workouts=total,
        current_streak=streak,
        longest_streak=max(stats.longest_streak, streak),
        total_minutes=stats.total_minutes + max(0, duration_min),
        discipline_score=discipline_score(total, stats.missed_workouts),
    )


def apply_failure(stats: UserStats) -> UserStats:
    """Stats after one more missed workout. Breaks the current streak."""
    missed = stats.missed_workouts + 1
    return dataclasses.replace(
        stats,
        missed_workouts=missed,
        current_streak=0,
        discipline_score=discipline_score(stats.total_workouts, missed),
    )


def replay_stats(
    sessions: Iterable[WorkoutSession],
    failures: Iterable[FailureEntry],
    duration_for: Callable[[str], int | None],
) -> UserStats:
    """Rebuild UserStats from the event history.

    Completed sessions are ordered by end time (start time if missing) and
    interleaved with failures by date. Ties keep completions before
    failures. *duration_for* maps a workout id to its minutes; unknown
    workouts contribute 0.

    Args:
        sessions: All stored sessions; open and abandoned ones are ignored.
        failures: All stored failure entries.
        duration_for: Catalog lookup for workout durations.

    Returns:
        The stats a live aggregator would hold after the same events.
    """
    events: list[tuple[datetime, int, WorkoutSession | FailureEntry]] = []
    for session in sessions:
        if session.completed:
            events.append((session.end_time or session.start_time, 0, session))
    for failure in failures:
        events.append((failure.date, 1, failure))
    events.sort(key=lambda e: (e[0], e[1]))

    stats = UserStats()
    for _, _, event in events:
        if isinstance(event, WorkoutSession):
            stats = apply_completion(stats, duration_for(event.workout_id) or 0)
        else:
            stats = apply_failure(stats)
    return stats


class StatsAggregator:
    """Sole writer of the persisted UserStats record.

    Both triggers do read-modify-write under one lock, so concurrent
    callers cannot lose an update. When the stored record cannot be read
    the update is skipped and the defaults are returned unsaved.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._lock = threading.RLock()

    def current(self) -> UserStats:
        """Persisted stats, or the defaults if missing or unreadable."""
        return self._decode(load_json(self._kv, STATS_KEY, None))

    def record_completion(self, duration_min: int) -> UserStats:
        """Apply a completed workout and persist."""
        stats = self._update(lambda s: apply_completion(s, duration_min))
        logger.info(
            "Workout completed: total=%d streak=%d score=%d",
            stats.total_workouts,
            stats.current_streak,
            stats.discipline_score,
        )
        return stats

    def record_failure(self) -> UserStats:
        """Apply a missed workout and persist."""
        stats = self._update(apply_failure)
        logger.info(
            "Workout missed: missed=%d score=%d", stats.missed_workouts, stats.discipline_score
        )
        return stats

    def rebuild(
        self,
        sessions: Iterable[WorkoutSession],
        failures: Iterable[FailureEntry],
        duration_for: Callable[[str], int | None],
    ) -> UserStats:
        """Replace the persisted view with one replayed from events."""
        with self._lock:
            stats = replay_stats(sessions, failures, duration_for)
            self._save(stats)
        logger.info("Rebuilt stats from event history: %s", stats)
        return stats

    def _update(self, apply: Callable[[UserStats], UserStats]) -> UserStats:
        with self._lock:
            try:
                data = read_json(self._kv, STATS_KEY, None)
            except FituStorageError as exc:
                logger.warning("Skipping stats update, read failed: %s", exc)
                return UserStats()
            stats = apply(self._decode(data))
            self._save(stats)
        return stats

    @staticmethod
    def _decode(data) -> UserStats:
        if not isinstance(data, dict):
            return UserStats()
        try:
            return stats_from_dict(data)
        except DECODE_ERRORS as exc:
            logger.warning("Stored stats are invalid, using defaults: %s", exc)
            return UserStats()

    def _save(self, stats: UserStats) -> None:
        save_json(self._kv, STATS_KEY, stats_to_dict(stats))
