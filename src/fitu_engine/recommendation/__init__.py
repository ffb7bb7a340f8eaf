"""Recommendation matcher — mood to catalog subset."""

from fitu_engine.recommendation.matcher import (
    ALL_FILTER,
    RECOMMENDED_FILTER,
    filter_workouts,
    is_mood_fresh,
    is_recommended,
    recommend_for,
)

__all__ = [
    "ALL_FILTER",
    "RECOMMENDED_FILTER",
    "filter_workouts",
    "is_mood_fresh",
    "is_recommended",
    "recommend_for",
]
