"""Tests for weekly and monthly progress analytics."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from fitu_engine.analytics import (
    build_report,
    monthly_consistency,
    recent_completed_sessions,
    start_of_month,
    start_of_week,
    weekly_goal_progress,
    weekly_progress,
)
from fitu_engine.models.enums import FailureCategory, Mood
from fitu_engine.models.stats import UserStats

UTC = timezone.utc
WEDNESDAY = datetime(2025, 1, 15, 10, 0, tzinfo=UTC)


class TestWeekBoundaries:
    def test_week_starts_on_sunday_midnight(self) -> None:
        assert start_of_week(WEDNESDAY) == datetime(2025, 1, 12, tzinfo=UTC)

    def test_sunday_is_its_own_week_start(self) -> None:
        sunday = datetime(2025, 1, 12, 23, 59, tzinfo=UTC)
        assert start_of_week(sunday) == datetime(2025, 1, 12, tzinfo=UTC)

    def test_saturday(self) -> None:
        saturday = datetime(2025, 1, 18, 6, 0, tzinfo=UTC)
        assert start_of_week(saturday) == datetime(2025, 1, 12, tzinfo=UTC)

    def test_month_start(self) -> None:
        assert start_of_month(WEDNESDAY) == datetime(2025, 1, 1, tzinfo=UTC)


class TestWeeklyProgress:
    def test_always_seven_buckets(self) -> None:
        buckets = weekly_progress([], WEDNESDAY)
        assert [b.day for b in buckets] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert buckets[0].day_date == date(2025, 1, 12)
        assert not any(b.completed for b in buckets)

    def test_completed_sessions_mark_their_day(self, session_factory) -> None:
        sessions = [
            session_factory("w1", datetime(2025, 1, 13, 7, 0, tzinfo=UTC)),  # Mon
            session_factory("w2", datetime(2025, 1, 13, 19, 0, tzinfo=UTC)),  # Mon again
            session_factory("w3", datetime(2025, 1, 15, 8, 0, tzinfo=UTC)),  # Wed
            session_factory("w4", datetime(2025, 1, 14, 8, 0, tzinfo=UTC), completed=False),  # Tue, open
            session_factory("w5", datetime(2025, 1, 11, 8, 0, tzinfo=UTC)),  # last Saturday
        ]
        buckets = weekly_progress(sessions, WEDNESDAY)
        assert [b.completed for b in buckets] == [False, True, False, True, False, False, False]
        assert buckets[1].count == 2

    def test_day_boundaries_are_half_open(self, session_factory) -> None:
        sessions = [session_factory("w1", datetime(2025, 1, 14, 0, 0, tzinfo=UTC))]  # Tue 00:00
        buckets = weekly_progress(sessions, WEDNESDAY)
        assert buckets[1].completed is False
        assert buckets[2].completed is True

    def test_goal_progress(self, session_factory) -> None:
        sessions = [
            session_factory("w1", datetime(2025, 1, 12 + i, 9, 0, tzinfo=UTC)) for i in range(3)
        ]
        buckets = weekly_progress(sessions, WEDNESDAY)
        assert weekly_goal_progress(buckets, 5) == pytest.approx(60.0)

    def test_goal_can_be_exceeded(self, session_factory) -> None:
        sessions = [
            session_factory("w1", datetime(2025, 1, 12 + i, 9, 0, tzinfo=UTC)) for i in range(7)
        ]
        saturday = datetime(2025, 1, 18, 20, 0, tzinfo=UTC)
        assert weekly_goal_progress(weekly_progress(sessions, saturday), 5) == pytest.approx(140.0)

    def test_zero_goal(self) -> None:
        assert weekly_goal_progress(weekly_progress([], WEDNESDAY), 0) == 0.0


class TestClockChanges:
    @pytest.fixture(autouse=True)
    def _new_york(self, local_timezone) -> None:
        local_timezone("America/New_York")

    def test_week_start_is_local_midnight_after_spring_forward(self) -> None:
        now = datetime(2026, 3, 11, 12, 0).astimezone()  # Wed, EDT
        assert start_of_week(now) == datetime(2026, 3, 8, 0, 0).astimezone()
        assert start_of_week(now).utcoffset() == timedelta(hours=-5)

    def test_late_saturday_session_stays_out_of_the_week(self, session_factory) -> None:
        now = datetime(2026, 3, 11, 12, 0).astimezone()
        saturday_night = datetime(2026, 3, 7, 23, 30).astimezone()  # EST
        buckets = weekly_progress([session_factory("w1", saturday_night)], now)
        assert buckets[0].day_date == date(2026, 3, 8)
        assert buckets[0].completed is False
        assert not any(b.completed for b in buckets)

    def test_sessions_land_on_their_local_day(self, session_factory) -> None:
        now = datetime(2026, 3, 11, 12, 0).astimezone()
        sessions = [
            session_factory("w1", datetime(2026, 3, 8, 23, 30).astimezone()),  # Sun, 23 h day
            session_factory("w2", datetime(2026, 3, 9, 0, 30).astimezone()),  # Mon
        ]
        buckets = weekly_progress(sessions, now)
        assert [b.count for b in buckets[:3]] == [1, 1, 0]

    def test_month_start_after_fall_back(self, session_factory) -> None:
        now = datetime(2026, 11, 15, 12, 0).astimezone()  # EST
        just_after_midnight = datetime(2026, 11, 1, 0, 30).astimezone()  # EDT
        assert start_of_month(now) == datetime(2026, 11, 1, 0, 0).astimezone()
        monthly = monthly_consistency([session_factory("w1", just_after_midnight)], [], now)
        assert monthly.month_start == date(2026, 11, 1)
        assert monthly.completed_sessions == 1


class TestMonthlyConsistency:
    def test_sessions_per_elapsed_day(self, session_factory, failure_factory) -> None:
        sessions = [
            session_factory("w1", datetime(2025, 1, 2, 9, 0, tzinfo=UTC)),
            session_factory("w1", datetime(2025, 1, 9, 9, 0, tzinfo=UTC)),
            session_factory("w1", datetime(2024, 12, 30, 9, 0, tzinfo=UTC)),  # last month
            session_factory("w1", datetime(2025, 1, 10, 9, 0, tzinfo=UTC), completed=False),
        ]
        failures = [
            failure_factory(FailureCategory.TIME, datetime(2025, 1, 5, tzinfo=UTC)),
            failure_factory(FailureCategory.TIME, datetime(2024, 12, 5, tzinfo=UTC)),
        ]
        monthly = monthly_consistency(sessions, failures, WEDNESDAY)
        assert monthly.month_start == date(2025, 1, 1)
        assert monthly.days_elapsed == 15
        assert monthly.completed_sessions == 2
        # 2 / 15 = 13.33%
        assert monthly.consistency_pct == 13
        assert monthly.missed_this_month == 1

    def test_first_of_month(self, session_factory) -> None:
        first = datetime(2025, 2, 1, 8, 0, tzinfo=UTC)
        monthly = monthly_consistency([session_factory("w1", first - timedelta(hours=1))], [], first)
        assert monthly.days_elapsed == 1
        assert monthly.consistency_pct == 100


class TestRecentCompletedSessions:
    def test_newest_first_completed_only(self, session_factory) -> None:
        sessions = [
            session_factory("w1", WEDNESDAY, session_id="a"),
            session_factory("w1", WEDNESDAY, session_id="b", completed=False),
            session_factory("w1", WEDNESDAY, session_id="c"),
        ]
        assert [s.id for s in recent_completed_sessions(sessions)] == ["c", "a"]

    def test_limit(self, session_factory) -> None:
        sessions = [session_factory("w1", WEDNESDAY, session_id=str(i)) for i in range(12)]
        recent = recent_completed_sessions(sessions, limit=10)
        assert len(recent) == 10
        assert recent[0].id == "11"


class TestBuildReport:
    def test_bundles_every_view(self, mood_factory, session_factory) -> None:
        stats = UserStats(total_workouts=1)
        sessions = [session_factory("w1", WEDNESDAY - timedelta(hours=2))]
        entries = [mood_factory(Mood.ENERGIZED, WEDNESDAY, workout_id="w1")]
        report = build_report(stats, entries, sessions, [], WEDNESDAY, weekly_goal=5)
        assert report.stats is stats
        assert report.mood_distribution.most_common is Mood.ENERGIZED
        assert report.mood_performance.best_mood is Mood.ENERGIZED
        assert len(report.weekly_progress) == 7
        assert report.weekly_goal_pct == pytest.approx(20.0)
        assert report.monthly.completed_sessions == 1
        assert report.failures.total == 0
        assert report.recent_sessions == tuple(sessions)
        assert report.recent_moods == tuple(entries)
