"""Time helpers shared by the engine components."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def now_local() -> datetime:
    """Timezone-aware local time; the default clock for every component."""
    return datetime.now().astimezone()


def as_aware(value: datetime) -> datetime:
    """Attach the local timezone to naive datetimes; aware ones pass through."""
    if value.tzinfo is None:
        return value.astimezone()
    return value
