"""Progress analytics over completed sessions: this week and this month.

Day, week and month boundaries follow the local calendar. Each boundary is
local midnight of its own date, so a day that crosses a clock change is 23
or 25 hours long.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Sequence

from fitu_engine.clock import as_aware
from fitu_engine.models.analytics import DayProgress, MonthlyConsistency
from fitu_engine.models.enums import WEEK_DAY_LABELS
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.stats.aggregator import round_half_up


def local_midnight(day: date) -> datetime:
    """Aware local datetime for 00:00 on *day*."""
    return datetime.combine(day, time()).astimezone()


def _week_sunday(now: datetime) -> date:
    today = as_aware(now).astimezone().date()
    return today - timedelta(days=(today.weekday() + 1) % 7)


def start_of_week(now: datetime) -> datetime:
    """Local midnight of the most recent Sunday (today if today is Sunday)."""
    return local_midnight(_week_sunday(now))


def start_of_month(now: datetime) -> datetime:
    return local_midnight(as_aware(now).astimezone().date().replace(day=1))


def weekly_progress(
    sessions: Sequence[WorkoutSession], now: datetime
) -> tuple[DayProgress, ...]:
    """Seven day buckets, Sunday to Saturday, for the week containing *now*.

    A day is completed when at least one completed session started within
    ``[local midnight, next local midnight)``.
    """
    sunday = _week_sunday(now)
    starts = [as_aware(s.start_time) for s in sessions if s.completed]

    buckets: list[DayProgress] = []
    for offset, label in enumerate(WEEK_DAY_LABELS):
        day = sunday + timedelta(days=offset)
        day_start = local_midnight(day)
        day_end = local_midnight(day + timedelta(days=1))
        count = sum(1 for t in starts if day_start <= t < day_end)
        buckets.append(
            DayProgress(day=label, day_date=day, completed=count > 0, count=count)
        )
    return tuple(buckets)


def weekly_goal_progress(buckets: Sequence[DayProgress], goal: int) -> float:
    """Completed days as a percentage of the weekly goal (may exceed 100)."""
    if goal <= 0:
        return 0.0
    completed_days = sum(1 for b in buckets if b.completed)
    return completed_days / goal * 100.0


def monthly_consistency(
    sessions: Sequence[WorkoutSession],
    failures: Sequence[FailureEntry],
    now: datetime,
) -> MonthlyConsistency:
    """Completed sessions this month per elapsed day of the month, as a percentage.

    The denominator is today's day-of-month, not the length of the month.
    """
    now = as_aware(now).astimezone()
    month_start = start_of_month(now)
    completed = sum(
        1 for s in sessions if s.completed and as_aware(s.start_time) >= month_start
    )
    missed = sum(1 for f in failures if as_aware(f.date) >= month_start)
    days_elapsed = now.day
    return MonthlyConsistency(
        month_start=month_start.date(),
        days_elapsed=days_elapsed,
        completed_sessions=completed,
        consistency_pct=round_half_up(completed / days_elapsed * 100.0),
        missed_this_month=missed,
    )


def recent_completed_sessions(
    sessions: Sequence[WorkoutSession], limit: int = 10
) -> tuple[WorkoutSession, ...]:
    """The last *limit* completed sessions, newest first."""
    if limit <= 0:
        return ()
    completed = [s for s in sessions if s.completed]
    return tuple(reversed(completed[-limit:]))
