"""Append-only event collections on top of a key-value store.

Each event kind (mood entries, workout sessions, failure entries) lives as
a JSON list under its own storage key. Persistence problems never reach the
caller: failed reads fall back to an empty collection and failed writes are
logged and dropped, leaving the store as of its last successful write. A
read-modify-write whose read fails is skipped rather than written over the
unreadable collection.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
import time
import uuid
from enum import Enum
from typing import Any, Callable

from fitu_storage import FituStorageError, KeyValueStore

from fitu_engine.models.failure import FailureEntry
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.serialization import (
    DECODE_ERRORS,
    failure_from_dict,
    failure_to_dict,
    mood_entry_from_dict,
    mood_entry_to_dict,
    session_from_dict,
    session_to_dict,
    to_json_string,
)

logger = logging.getLogger(__name__)

CURRENT_MOOD_KEY = "fitu_current_mood"

_ID_TOKEN_LEN = 9


class EventKind(Enum):
    """Event collections and the storage key each one lives under."""

    MOOD_ENTRIES = "fitu_mood_entries"
    WORKOUT_SESSIONS = "fitu_workout_sessions"
    FAILURE_ENTRIES = "fitu_failure_entries"

    @property
    def key(self) -> str:
        return self.value


_CODECS: dict[EventKind, tuple[Callable[[Any], dict], Callable[[dict], Any]]] = {
    EventKind.MOOD_ENTRIES: (mood_entry_to_dict, mood_entry_from_dict),
    EventKind.WORKOUT_SESSIONS: (session_to_dict, session_from_dict),
    EventKind.FAILURE_ENTRIES: (failure_to_dict, failure_from_dict),
}


def generate_id() -> str:
    """Return a unique record id: ``<epoch-ms>-<9 random chars>``."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:_ID_TOKEN_LEN]}"


# ---------------------------------------------------------------------------
# Blob helpers shared by every component that owns a storage key
# ---------------------------------------------------------------------------


def read_json(kv: KeyValueStore, key: str, default: Any) -> Any:
    """Read and decode the JSON blob at *key*.

    Returns *default* when the key is absent or holds undecodable JSON.

    Raises:
        FituStorageError: The backend could not be read.
    """
    blob = kv.get(key)
    if blob is None:
        return default
    try:
        return json.loads(blob)
    except json.JSONDecodeError as exc:
        logger.warning("Corrupt data under %s, using default: %s", key, exc)
        return default


def load_json(kv: KeyValueStore, key: str, default: Any) -> Any:
    """Like :func:`read_json`, but a failed read also yields *default*."""
    try:
        return read_json(kv, key, default)
    except FituStorageError as exc:
        logger.warning("Failed to read %s, using default: %s", key, exc)
        return default


def save_json(kv: KeyValueStore, key: str, payload: Any) -> bool:
    """Encode *payload* and write it to *key*. Logs and returns False on failure."""
    try:
        ok = kv.set(key, to_json_string(payload))
    except FituStorageError as exc:
        logger.warning("Failed to write %s: %s", key, exc)
        return False
    if not ok:
        logger.warning("Storage rejected write to %s", key)
    return ok


class EventStore:
    """Owns the event collections and the current-mood pointer.

    Usage:
        store = EventStore(InMemoryKeyValueStore())
        entry = store.append(EventKind.MOOD_ENTRIES, mood_entry)
        sessions = store.list_all(EventKind.WORKOUT_SESSIONS)
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def kv(self) -> KeyValueStore:
        return self._kv

    # ------------------------------------------------------------------
    # Event collections
    # ------------------------------------------------------------------

    def append(self, kind: EventKind, record: Any) -> Any:
        """Store *record* under a freshly generated id and return the stored copy."""
        to_dict, _ = _CODECS[kind]
        stored = dataclasses.replace(record, id=generate_id())
        with self._lock_for(kind.key):
            try:
                rows = self._read_rows(kind, strict=True)
            except FituStorageError as exc:
                logger.warning("Skipping append to %s, read failed: %s", kind.key, exc)
                return stored
            rows.append(to_dict(stored))
            save_json(self._kv, kind.key, rows)
        logger.debug("Appended %s record %s", kind.name, stored.id)
        return stored

    def list_all(self, kind: EventKind) -> tuple:
        """Return every decodable record of *kind* in insertion order."""
        _, from_dict = _CODECS[kind]
        records = []
        for row in self._read_rows(kind):
            try:
                records.append(from_dict(row))
            except DECODE_ERRORS as exc:
                logger.warning("Skipping undecodable %s record: %s", kind.name, exc)
        return tuple(records)

    def find(self, kind: EventKind, record_id: str) -> Any | None:
        for record in self.list_all(kind):
            if record.id == record_id:
                return record
        return None

    def update_by_id(self, kind: EventKind, record_id: str, **changes: Any) -> Any | None:
        """Apply *changes* to the record with *record_id*.

        No-op (returns None) when the id is absent, the stored row cannot
        be decoded or the collection cannot be read. Returns the updated record otherwise.
        """
        to_dict, from_dict = _CODECS[kind]
        with self._lock_for(kind.key):
            try:
                rows = self._read_rows(kind, strict=True)
            except FituStorageError as exc:
                logger.warning("Skipping update of %s %s, read failed: %s", kind.name, record_id, exc)
                return None
            for index, row in enumerate(rows):
                if not isinstance(row, dict) or row.get("id") != record_id:
                    continue
                try:
                    current = from_dict(row)
                except DECODE_ERRORS as exc:
                    logger.warning("Cannot update undecodable %s %s: %s", kind.name, record_id, exc)
                    return None
                updated = dataclasses.replace(current, **changes)
                rows[index] = to_dict(updated)
                save_json(self._kv, kind.key, rows)
                return updated
        logger.debug("update_by_id: no %s record %s", kind.name, record_id)
        return None

    # ------------------------------------------------------------------
    # Typed conveniences
    # ------------------------------------------------------------------

    def mood_entries(self) -> tuple[MoodEntry, ...]:
        return self.list_all(EventKind.MOOD_ENTRIES)

    def sessions(self) -> tuple[WorkoutSession, ...]:
        return self.list_all(EventKind.WORKOUT_SESSIONS)

    def failures(self) -> tuple[FailureEntry, ...]:
        return self.list_all(EventKind.FAILURE_ENTRIES)

    def open_sessions(self) -> tuple[WorkoutSession, ...]:
        """Sessions that were started but neither completed nor closed."""
        return tuple(s for s in self.sessions() if s.is_open)

    # ------------------------------------------------------------------
    # Current mood pointer
    # ------------------------------------------------------------------

    def set_current_mood(self, entry: MoodEntry) -> None:
        save_json(self._kv, CURRENT_MOOD_KEY, mood_entry_to_dict(entry))

    def get_current_mood(self) -> MoodEntry | None:
        data = load_json(self._kv, CURRENT_MOOD_KEY, None)
        if not data:
            return None
        try:
            return mood_entry_from_dict(data)
        except DECODE_ERRORS as exc:
            logger.warning("Ignoring undecodable current mood: %s", exc)
            return None

    def clear_current_mood(self) -> None:
        save_json(self._kv, CURRENT_MOOD_KEY, None)

    def clear(self) -> None:
        """Drop every stored key (events, pointers, stats, catalog)."""
        try:
            self._kv.remove_all()
        except FituStorageError as exc:
            logger.warning("Failed to clear storage: %s", exc)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lock_for(self, key: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    def _read_rows(self, kind: EventKind, strict: bool = False) -> list:
        read = read_json if strict else load_json
        rows = read(self._kv, kind.key, [])
        if not isinstance(rows, list):
            logger.warning("Expected a list under %s, got %s", kind.key, type(rows).__name__)
            return []
        return rows
