"""Tests for EventStore — append-only event collections over a key-value store."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from fitu_engine.event_store import (
    CURRENT_MOOD_KEY,
    EventKind,
    EventStore,
    generate_id,
    load_json,
    read_json,
    save_json,
)
from fitu_engine.models.enums import FailureCategory, Mood
from fitu_storage import InMemoryKeyValueStore, StorageUnavailable

T0 = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


class TestGenerateId:
    def test_format(self) -> None:
        assert re.fullmatch(r"\d{13}-[0-9a-f]{9}", generate_id())

    def test_unique(self) -> None:
        assert len({generate_id() for _ in range(200)}) == 200


class TestJsonHelpers:
    def test_load_missing_key_returns_default(self) -> None:
        assert load_json(InMemoryKeyValueStore(), "k", []) == []

    def test_load_corrupt_blob_returns_default(self) -> None:
        kv = InMemoryKeyValueStore({"k": "{oops"})
        assert load_json(kv, "k", "fallback") == "fallback"

    def test_load_storage_error_returns_default(self) -> None:
        kv = MagicMock()
        kv.get.side_effect = StorageUnavailable("disk gone", key="k")
        assert load_json(kv, "k", None) is None

    def test_read_propagates_storage_error(self) -> None:
        kv = MagicMock()
        kv.get.side_effect = StorageUnavailable("disk gone", key="k")
        with pytest.raises(StorageUnavailable):
            read_json(kv, "k", None)

    def test_save_reports_rejected_write(self) -> None:
        kv = MagicMock()
        kv.set.return_value = False
        assert save_json(kv, "k", [1]) is False

    def test_save_swallows_storage_error(self) -> None:
        kv = MagicMock()
        kv.set.side_effect = StorageUnavailable("disk gone")
        assert save_json(kv, "k", [1]) is False


# ---------------------------------------------------------------------------
# Event collections
# ---------------------------------------------------------------------------


class TestAppend:
    def test_append_assigns_fresh_id(self, store, mood_factory) -> None:
        stored = store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.CALM, T0, entry_id=""))
        assert stored.id
        assert store.mood_entries() == (stored,)

    def test_list_preserves_insertion_order(self, store, mood_factory) -> None:
        moods = [Mood.TIRED, Mood.CALM, Mood.ENERGIZED]
        for mood in moods:
            store.append(EventKind.MOOD_ENTRIES, mood_factory(mood, T0))
        assert [e.mood for e in store.mood_entries()] == moods

    def test_ids_unique_across_appends(self, store, failure_factory) -> None:
        ids = set()
        for _ in range(20):
            entry = store.append(EventKind.FAILURE_ENTRIES, failure_factory(FailureCategory.TIME, T0))
            ids.add(entry.id)
        assert len(ids) == 20

    def test_collections_are_independent(self, store, mood_factory) -> None:
        store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.CALM, T0))
        assert store.sessions() == ()
        assert store.failures() == ()

    def test_stored_layout_is_camel_case_json_list(self, kv, store, session_factory) -> None:
        store.append(EventKind.WORKOUT_SESSIONS, session_factory("w1", T0))
        rows = json.loads(kv.get("fitu_workout_sessions"))
        assert isinstance(rows, list)
        assert rows[0]["workoutId"] == "w1"
        assert rows[0]["completed"] is True

    def test_failed_write_leaves_previous_state(self, kv, store, mood_factory) -> None:
        first = store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.CALM, T0))
        kv.set = MagicMock(return_value=False)
        store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.TIRED, T0))
        assert store.mood_entries() == (first,)

    def test_failed_read_skips_write_instead_of_truncating(
        self, store, mood_factory, fail_next_read
    ) -> None:
        for mood in (Mood.CALM, Mood.TIRED, Mood.STRESSED):
            store.append(EventKind.MOOD_ENTRIES, mood_factory(mood, T0))
        fail_next_read()
        store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.MOTIVATED, T0))
        assert len(store.mood_entries()) == 3

        store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.ENERGIZED, T0))
        assert [e.mood for e in store.mood_entries()] == [
            Mood.CALM, Mood.TIRED, Mood.STRESSED, Mood.ENERGIZED,
        ]


class TestListAll:
    def test_corrupt_collection_reads_as_empty(self, kv, store) -> None:
        kv.set(EventKind.MOOD_ENTRIES.key, "not json at all")
        assert store.mood_entries() == ()

    def test_non_list_collection_reads_as_empty(self, kv, store) -> None:
        kv.set(EventKind.FAILURE_ENTRIES.key, '{"a": 1}')
        assert store.failures() == ()

    def test_undecodable_rows_are_skipped(self, kv, store, mood_factory) -> None:
        good = store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.CALM, T0))
        rows = json.loads(kv.get(EventKind.MOOD_ENTRIES.key))
        rows.append({"id": "bad", "mood": "grumpy", "intensity": 3, "timestamp": T0.isoformat()})
        kv.set(EventKind.MOOD_ENTRIES.key, json.dumps(rows))
        assert store.mood_entries() == (good,)

    def test_find(self, store, session_factory) -> None:
        stored = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w2", T0))
        assert store.find(EventKind.WORKOUT_SESSIONS, stored.id) == stored
        assert store.find(EventKind.WORKOUT_SESSIONS, "missing") is None


class TestUpdateById:
    def test_updates_only_the_target(self, store, session_factory) -> None:
        a = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w1", T0, completed=False))
        b = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w2", T0, completed=False))
        updated = store.update_by_id(
            EventKind.WORKOUT_SESSIONS, b.id, completed=True, end_time=T0
        )
        assert updated.completed is True
        sessions = store.sessions()
        assert sessions[0] == a
        assert sessions[1] == updated

    def test_missing_id_is_noop(self, store, session_factory) -> None:
        a = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w1", T0, completed=False))
        assert store.update_by_id(EventKind.WORKOUT_SESSIONS, "nope", completed=True) is None
        assert store.sessions() == (a,)

    def test_failed_read_leaves_collection_untouched(
        self, store, session_factory, fail_next_read
    ) -> None:
        a = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w1", T0, completed=False))
        b = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w2", T0, completed=False))
        fail_next_read()
        assert store.update_by_id(EventKind.WORKOUT_SESSIONS, a.id, completed=True) is None
        assert store.sessions() == (a, b)

    def test_open_sessions(self, store, session_factory) -> None:
        store.append(EventKind.WORKOUT_SESSIONS, session_factory("w1", T0, completed=True))
        open_one = store.append(EventKind.WORKOUT_SESSIONS, session_factory("w2", T0, completed=False))
        assert store.open_sessions() == (open_one,)


# ---------------------------------------------------------------------------
# Current mood pointer
# ---------------------------------------------------------------------------


class TestCurrentMood:
    def test_unset_is_none(self, store) -> None:
        assert store.get_current_mood() is None

    def test_set_and_get(self, store, mood_factory) -> None:
        entry = mood_factory(Mood.STRESSED, T0, entry_id="m1")
        store.set_current_mood(entry)
        assert store.get_current_mood() == entry

    def test_clear_writes_null(self, kv, store, mood_factory) -> None:
        store.set_current_mood(mood_factory(Mood.STRESSED, T0))
        store.clear_current_mood()
        assert kv.get(CURRENT_MOOD_KEY) == "null"
        assert store.get_current_mood() is None

    def test_garbage_pointer_is_ignored(self, kv, store) -> None:
        kv.set(CURRENT_MOOD_KEY, '{"mood": "calm"}')
        assert store.get_current_mood() is None


class TestClear:
    def test_clear_drops_everything(self, kv, store, mood_factory) -> None:
        store.append(EventKind.MOOD_ENTRIES, mood_factory(Mood.CALM, T0))
        store.set_current_mood(mood_factory(Mood.CALM, T0))
        store.clear()
        assert kv.keys() == []
        assert store.mood_entries() == ()

    def test_clear_swallows_storage_error(self) -> None:
        kv = MagicMock()
        kv.remove_all.side_effect = StorageUnavailable("busy")
        EventStore(kv).clear()
