"""Environment-variable-based configuration for the fitness engine."""

from __future__ import annotations

import os
from pathlib import Path

DATA_PATH: Path = Path(os.environ.get("FITU_DATA_PATH", "~/.fitu/store.json")).expanduser()

# How long a logged mood keeps driving recommendations
MOOD_TTL_MINUTES: int = int(os.environ.get("FITU_MOOD_TTL_MINUTES", "240"))

# Target number of workout days per week
WEEKLY_GOAL: int = int(os.environ.get("FITU_WEEKLY_GOAL", "5"))

# Countdown used for rep-based exercises that carry no explicit duration
REP_FALLBACK_SECONDS: int = int(os.environ.get("FITU_REP_FALLBACK_SECONDS", "30"))

TICK_INTERVAL_S: float = float(os.environ.get("FITU_TICK_INTERVAL_S", "1.0"))

RECENT_SESSIONS_LIMIT: int = int(os.environ.get("FITU_RECENT_SESSIONS_LIMIT", "10"))
RECENT_MOODS_LIMIT: int = int(os.environ.get("FITU_RECENT_MOODS_LIMIT", "7"))
