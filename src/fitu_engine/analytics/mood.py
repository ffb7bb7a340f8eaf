"""Mood analytics: distribution of logged moods and mood-to-completion rates."""

from __future__ import annotations

from typing import Iterable, Sequence

from fitu_engine.analytics.counting import canonical_counts, first_max_label, percent_shares
from fitu_engine.models.analytics import (
    MoodCount,
    MoodDistribution,
    MoodPerformance,
    MoodPerformanceReport,
)
from fitu_engine.models.enums import Mood
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.stats.aggregator import round_half_up


def mood_distribution(entries: Sequence[MoodEntry]) -> MoodDistribution:
    """Count mood entries per mood.

    Percentages are shares of all entries (0 for every mood when there
    are none). ``most_common`` is the highest count, canonical mood order
    on ties, and None with no entries.
    """
    order = [m.value for m in Mood]
    counts = canonical_counts((e.mood.value for e in entries), order)
    shares = percent_shares(counts)

    mood_counts = tuple(
        MoodCount(
            mood=mood,
            count=int(counts[mood.value]),
            percent=float(shares[mood.value]),
            display_percent=round_half_up(float(shares[mood.value])),
        )
        for mood in Mood
    )
    top = first_max_label(counts)
    return MoodDistribution(
        counts=mood_counts,
        total=int(counts.sum()),
        most_common=Mood(top) if top is not None else None,
    )


def mood_performance(
    entries: Iterable[MoodEntry],
    sessions: Sequence[WorkoutSession],
) -> MoodPerformanceReport:
    """Completion rate of workouts linked to each mood.

    An entry is linked when its ``workout_id`` matches a stored session;
    the first such session (insertion order) decides whether the linked
    workout was completed. Moods without any linked session are left out.
    ``best_mood`` has the strictly highest non-zero rate, canonical mood
    order on ties.
    """
    first_session: dict[str, WorkoutSession] = {}
    for session in sessions:
        first_session.setdefault(session.workout_id, session)

    completed = {mood: 0 for mood in Mood}
    total = {mood: 0 for mood in Mood}
    for entry in entries:
        if entry.workout_id is None:
            continue
        session = first_session.get(entry.workout_id)
        if session is None:
            continue
        total[entry.mood] += 1
        if session.completed:
            completed[entry.mood] += 1

    by_mood = tuple(
        MoodPerformance(mood=mood, completed=completed[mood], total=total[mood])
        for mood in Mood
        if total[mood] > 0
    )

    best: Mood | None = None
    best_rate = 0.0
    for perf in by_mood:
        if perf.rate > best_rate:
            best_rate = perf.rate
            best = perf.mood
    return MoodPerformanceReport(by_mood=by_mood, best_mood=best)


def recent_moods(entries: Sequence[MoodEntry], limit: int = 7) -> tuple[MoodEntry, ...]:
    """The last *limit* entries, newest first."""
    if limit <= 0:
        return ()
    return tuple(reversed(entries[-limit:]))
