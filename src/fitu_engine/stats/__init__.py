"""Stats aggregation — discipline score and streak bookkeeping."""

from fitu_engine.stats.aggregator import (
    StatsAggregator,
    apply_completion,
    apply_failure,
    discipline_score,
    replay_stats,
    round_half_up,
)

__all__ = [
    "StatsAggregator",
    "apply_completion",
    "apply_failure",
    "discipline_score",
    "replay_stats",
    "round_half_up",
]
