"""Analytics engine — batch aggregation over the stored event history."""

from fitu_engine.analytics.failures import failure_breakdown
from fitu_engine.analytics.mood import mood_distribution, mood_performance, recent_moods
from fitu_engine.analytics.progress import (
    monthly_consistency,
    recent_completed_sessions,
    start_of_month,
    start_of_week,
    weekly_goal_progress,
    weekly_progress,
)
from fitu_engine.analytics.report import build_report

__all__ = [
    "build_report",
    "failure_breakdown",
    "monthly_consistency",
    "mood_distribution",
    "mood_performance",
    "recent_completed_sessions",
    "recent_moods",
    "start_of_month",
    "start_of_week",
    "weekly_goal_progress",
    "weekly_progress",
]
