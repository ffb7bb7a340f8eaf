"""Bundle every analytics view into one report."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from fitu_engine.analytics.failures import failure_breakdown
from fitu_engine.analytics.mood import mood_distribution, mood_performance, recent_moods
from fitu_engine.analytics.progress import (
    monthly_consistency,
    recent_completed_sessions,
    weekly_goal_progress,
    weekly_progress,
)
from fitu_engine.config import RECENT_MOODS_LIMIT, RECENT_SESSIONS_LIMIT, WEEKLY_GOAL
from fitu_engine.models.analytics import AnalyticsReport
from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.stats import UserStats


def build_report(
    stats: UserStats,
    entries: Sequence[MoodEntry],
    sessions: Sequence[WorkoutSession],
    failures: Sequence[FailureEntry],
    now: datetime,
    weekly_goal: int = WEEKLY_GOAL,
) -> AnalyticsReport:
    """Compute every analytics view from one snapshot of the event store."""
    week = weekly_progress(sessions, now)
    return AnalyticsReport(
        stats=stats,
        mood_distribution=mood_distribution(entries),
        mood_performance=mood_performance(entries, sessions),
        weekly_progress=week,
        weekly_goal_pct=weekly_goal_progress(week, weekly_goal),
        monthly=monthly_consistency(sessions, failures, now),
        failures=failure_breakdown(failures),
        recent_sessions=recent_completed_sessions(sessions, RECENT_SESSIONS_LIMIT),
        recent_moods=recent_moods(entries, RECENT_MOODS_LIMIT),
    )
