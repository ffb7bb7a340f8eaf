"""Custom exception hierarchy for the key-value persistence layer."""

from __future__ import annotations


class FituStorageError(Exception):
    """Base exception for all fitu_storage errors."""


class StorageUnavailable(FituStorageError):
    """A read or write against the backing store failed."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class StorageCorrupt(FituStorageError):
    """A stored blob exists but could not be decoded."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
