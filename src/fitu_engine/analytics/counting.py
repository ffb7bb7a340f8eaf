"""Category counting shared by the mood and failure breakdowns."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd


def canonical_counts(values: Iterable[str], order: Sequence[str]) -> pd.Series:
    """Count occurrences of each value, indexed in *order* with zeros filled in.

    Values outside *order* are dropped.
    """
    series = pd.Series(list(values), dtype="object")
    return series.value_counts().reindex(list(order), fill_value=0).astype(np.int64)


def percent_shares(counts: pd.Series) -> pd.Series:
    """Each count as a percentage of the total; all zeros when the total is 0."""
    total = int(counts.sum())
    if total == 0:
        return counts.astype(np.float64) * 0.0
    return counts.astype(np.float64) / total * 100.0


def first_max_label(counts: pd.Series) -> str | None:
    """Index label of the strictly highest count, first in order on ties.

    None when every count is zero.
    """
    if counts.empty or int(counts.max()) <= 0:
        return None
    return str(counts.idxmax())
