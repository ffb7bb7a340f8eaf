"""Key-value persistence backends — all fitu disk I/O lives here."""

from fitu_storage.backends import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from fitu_storage.exceptions import (
    FituStorageError,
    StorageCorrupt,
    StorageUnavailable,
)

__all__ = [
    "FituStorageError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageCorrupt",
    "StorageUnavailable",
]
