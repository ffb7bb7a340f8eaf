"""Materialized user statistics."""

from __future__ import annotations

from dataclasses import dataclass

from fitu_engine.models.enums import DEFAULT_DISCIPLINE_SCORE


@dataclass(frozen=True)
class UserStats:
    """Derived view over completion and failure events.

    Only the StatsAggregator writes this record; everyone else reads it.
    """

    total_workouts: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    discipline_score: int = DEFAULT_DISCIPLINE_SCORE
    total_minutes: int = 0
    missed_workouts: int = 0
