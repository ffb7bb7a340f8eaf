"""Key-value store backends.

The engine treats a store as opaque strings-in/strings-out: it serializes
its own records and hands the backend a JSON blob per key. Backends only
decide where the blobs live.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from fitu_storage.exceptions import StorageCorrupt, StorageUnavailable

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal persistence contract used by the engine.

    Subclasses must implement:
        get(): return the blob for *key*, or None if absent
        set(): persist the blob, returning False on failure
        remove_all(): drop every key
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored blob for *key*, or None if it was never set."""
        ...

    @abstractmethod
    def set(self, key: str, blob: str) -> bool:
        """Store *blob* under *key*. Returns False if the write failed."""
        ...

    @abstractmethod
    def remove_all(self) -> None:
        """Delete every key in the store."""
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, blob: str) -> bool:
        self._data[key] = blob
        return True

    def remove_all(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        """List all stored keys."""
        return list(self._data.keys())


class JsonFileKeyValueStore(KeyValueStore):
    """Single JSON file mapping keys to blobs.

    Every read goes back to disk so separate processes see each other's
    writes. Writes land in a temp file next to the target and are moved
    into place with ``os.replace``.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        with self._lock:
            data = self._read_all()
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageCorrupt(f"Non-string blob stored under {key!r}", key=key)
        return value

    def set(self, key: str, blob: str) -> bool:
        with self._lock:
            try:
                data = self._read_all()
            except StorageCorrupt:
                logger.warning(
                    "Store file %s is corrupt, starting from an empty store", self._path
                )
                data = {}
            except StorageUnavailable as exc:
                logger.warning("Could not read %s before writing %s: %s", self._path, key, exc)
                return False

            data[key] = blob
            try:
                self._write_all(data)
            except OSError as exc:
                logger.warning("Failed to write %s to %s: %s", key, self._path, exc)
                return False
        return True

    def remove_all(self) -> None:
        with self._lock:
            try:
                self._path.unlink()
                logger.info("Cleared store at %s", self._path)
            except FileNotFoundError:
                pass
            except OSError as exc:
                raise StorageUnavailable(f"Could not clear {self._path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_all(self) -> dict[str, object]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageUnavailable(f"Could not read {self._path}: {exc}") from exc

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageCorrupt(f"Invalid JSON in {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageCorrupt(f"Expected a JSON object in {self._path}")
        return data

    def _write_all(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
