"""Enumerations and fixed constants for the fitness engine.

Enum member order is the canonical iteration order used by every
aggregation (and therefore by every tie-break).
"""

from enum import Enum


class Mood(str, Enum):
    """Self-reported mood at logging time."""

    ENERGIZED = "energized"
    CALM = "calm"
    TIRED = "tired"
    STRESSED = "stressed"
    MOTIVATED = "motivated"


class WorkoutType(str, Enum):
    """Catalog workout families."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    HIIT = "hiit"
    RECOVERY = "recovery"


class FailureCategory(str, Enum):
    """Why a scheduled workout was missed."""

    TIME = "time"
    MOTIVATION = "motivation"
    ENERGY = "energy"
    HEALTH = "health"
    SCHEDULE = "schedule"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Value bounds
# ---------------------------------------------------------------------------
MIN_MOOD_INTENSITY = 1
MAX_MOOD_INTENSITY = 5

# Discipline score for a user with no completions and no misses
DEFAULT_DISCIPLINE_SCORE = 100

# Weekday labels for the weekly progress view, week starts Sunday
WEEK_DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# ---------------------------------------------------------------------------
# Display metadata
# ---------------------------------------------------------------------------

MOOD_LABELS: dict[Mood, str] = {
    Mood.ENERGIZED: "Energized",
    Mood.CALM: "Calm",
    Mood.TIRED: "Tired",
    Mood.STRESSED: "Stressed",
    Mood.MOTIVATED: "Motivated",
}

# Stored as FailureEntry.reason when the caller gives no reason text
FAILURE_REASON_TITLES: dict[FailureCategory, str] = {
    FailureCategory.TIME: "Time constraints",
    FailureCategory.MOTIVATION: "Motivation",
    FailureCategory.ENERGY: "Energy levels",
    FailureCategory.HEALTH: "Health",
    FailureCategory.SCHEDULE: "Schedule",
    FailureCategory.OTHER: "Other",
}

FAILURE_CATEGORY_LABELS: dict[FailureCategory, str] = {
    FailureCategory.TIME: "Time constraints",
    FailureCategory.MOTIVATION: "Lack of motivation",
    FailureCategory.ENERGY: "Low energy",
    FailureCategory.HEALTH: "Health issues",
    FailureCategory.SCHEDULE: "Schedule conflicts",
    FailureCategory.OTHER: "Other reasons",
}

FAILURE_CATEGORY_TIPS: dict[FailureCategory, str] = {
    FailureCategory.TIME: (
        "Try scheduling shorter workouts or breaking them into smaller "
        "sessions throughout the day."
    ),
    FailureCategory.MOTIVATION: (
        "Set smaller goals, find a workout buddy, or try new workout types "
        "to reignite interest."
    ),
    FailureCategory.ENERGY: (
        "Focus on sleep quality, nutrition, and consider lighter recovery "
        "workouts on low-energy days."
    ),
    FailureCategory.HEALTH: (
        "Listen to your body. Consult a professional if issues persist, "
        "and try gentle movement when possible."
    ),
    FailureCategory.SCHEDULE: (
        "Build workouts into your calendar as non-negotiable appointments. "
        "Morning sessions often have fewer conflicts."
    ),
    FailureCategory.OTHER: (
        "Reflect on recurring patterns and consider adjusting your routine "
        "to address them."
    ),
}
