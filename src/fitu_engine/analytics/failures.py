"""Failure analytics: why workouts get missed."""

from __future__ import annotations

from typing import Sequence

from fitu_engine.analytics.counting import canonical_counts, first_max_label, percent_shares
from fitu_engine.models.analytics import CategoryCount, FailureBreakdown
from fitu_engine.models.enums import FAILURE_CATEGORY_TIPS, FailureCategory
from fitu_engine.models.failure import FailureEntry


def failure_breakdown(failures: Sequence[FailureEntry]) -> FailureBreakdown:
    """Count failures per category.

    ``top_category`` is the category with strictly the highest count; on a
    tie the one earliest in canonical category order (time, motivation,
    energy, health, schedule, other) wins. None when nothing was logged.
    """
    order = [c.value for c in FailureCategory]
    counts = canonical_counts((f.category.value for f in failures), order)
    shares = percent_shares(counts)

    category_counts = tuple(
        CategoryCount(
            category=category,
            count=int(counts[category.value]),
            percent=float(shares[category.value]),
            display_percent=round(float(shares[category.value]), 1),
        )
        for category in FailureCategory
    )

    top_label = first_max_label(counts)
    if top_label is None:
        return FailureBreakdown(counts=category_counts, total=0)

    top = FailureCategory(top_label)
    return FailureBreakdown(
        counts=category_counts,
        total=int(counts.sum()),
        top_category=top,
        top_count=int(counts[top_label]),
        top_tip=FAILURE_CATEGORY_TIPS[top],
    )
