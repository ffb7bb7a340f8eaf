"""Mood log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fitu_engine.models.enums import MAX_MOOD_INTENSITY, MIN_MOOD_INTENSITY, Mood


@dataclass(frozen=True)
class MoodEntry:
    """A single mood check-in. Never mutated or deleted once stored."""

    id: str
    mood: Mood
    intensity: int  # 1 (barely) to 5 (strongly)
    timestamp: datetime
    workout_id: str | None = None

    def __post_init__(self) -> None:
        if not MIN_MOOD_INTENSITY <= self.intensity <= MAX_MOOD_INTENSITY:
            raise ValueError(
                f"Mood intensity must be between {MIN_MOOD_INTENSITY} and "
                f"{MAX_MOOD_INTENSITY}, got {self.intensity}"
            )
