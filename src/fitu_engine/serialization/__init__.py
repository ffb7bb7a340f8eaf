"""Serialization module — convert records to and from stored JSON."""

from fitu_engine.serialization.records import (
    DECODE_ERRORS,
    failure_from_dict,
    failure_to_dict,
    mood_entry_from_dict,
    mood_entry_to_dict,
    parse_datetime,
    session_from_dict,
    session_to_dict,
    stats_from_dict,
    stats_to_dict,
    to_json_string,
    workout_from_dict,
    workout_to_dict,
)

__all__ = [
    "DECODE_ERRORS",
    "failure_from_dict",
    "failure_to_dict",
    "mood_entry_from_dict",
    "mood_entry_to_dict",
    "parse_datetime",
    "session_from_dict",
    "session_to_dict",
    "stats_from_dict",
    "stats_to_dict",
    "to_json_string",
    "workout_from_dict",
    "workout_to_dict",
]
