"""Result types returned by the analytics functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from fitu_engine.models.enums import FAILURE_CATEGORY_LABELS, FailureCategory, Mood
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.stats import UserStats


@dataclass(frozen=True)
class MoodCount:
    mood: Mood
    count: int
    percent: float  # unrounded share of all entries, 0-100
    display_percent: int


@dataclass(frozen=True)
class MoodDistribution:
    """Mood entry counts in canonical mood order (zero counts included)."""

    counts: tuple[MoodCount, ...]
    total: int
    most_common: Mood | None = None

    def count_for(self, mood: Mood) -> int:
        for c in self.counts:
            if c.mood == mood:
                return c.count
        return 0

    @property
    def nonzero(self) -> tuple[MoodCount, ...]:
        """Moods that were logged at least once, most frequent first."""
        return tuple(sorted((c for c in self.counts if c.count > 0), key=lambda c: -c.count))


@dataclass(frozen=True)
class MoodPerformance:
    """Completion ratio of sessions linked to one mood."""

    mood: Mood
    completed: int
    total: int

    @property
    def rate(self) -> float:
        return self.completed / self.total if self.total else 0.0


@dataclass(frozen=True)
class MoodPerformanceReport:
    """Only moods with at least one linked session appear in ``by_mood``."""

    by_mood: tuple[MoodPerformance, ...] = field(default_factory=tuple)
    best_mood: Mood | None = None

    def get(self, mood: Mood) -> MoodPerformance | None:
        for p in self.by_mood:
            if p.mood == mood:
                return p
        return None


@dataclass(frozen=True)
class DayProgress:
    """One day bucket of the current week."""

    day: str  # "Sun".."Sat"
    day_date: date
    completed: bool
    count: int


@dataclass(frozen=True)
class MonthlyConsistency:
    month_start: date
    days_elapsed: int
    completed_sessions: int
    consistency_pct: int  # completed sessions per elapsed day, as a percentage
    missed_this_month: int = 0


@dataclass(frozen=True)
class CategoryCount:
    category: FailureCategory
    count: int
    percent: float
    display_percent: float  # one decimal place

    @property
    def label(self) -> str:
        return FAILURE_CATEGORY_LABELS[self.category]


@dataclass(frozen=True)
class FailureBreakdown:
    """Failure counts in canonical category order (zero counts included)."""

    counts: tuple[CategoryCount, ...]
    total: int
    top_category: FailureCategory | None = None
    top_count: int = 0
    top_tip: str | None = None

    def count_for(self, category: FailureCategory) -> int:
        for c in self.counts:
            if c.category == category:
                return c.count
        return 0

    @property
    def ranked(self) -> tuple[CategoryCount, ...]:
        """Non-zero categories, highest count first, canonical order on ties."""
        return tuple(sorted((c for c in self.counts if c.count > 0), key=lambda c: -c.count))


@dataclass(frozen=True)
class AnalyticsReport:
    """Everything the progress and insight views need, computed in one pass."""

    stats: UserStats
    mood_distribution: MoodDistribution
    mood_performance: MoodPerformanceReport
    weekly_progress: tuple[DayProgress, ...]
    weekly_goal_pct: float
    monthly: MonthlyConsistency
    failures: FailureBreakdown
    recent_sessions: tuple[WorkoutSession, ...] = field(default_factory=tuple)
    recent_moods: tuple[MoodEntry, ...] = field(default_factory=tuple)
