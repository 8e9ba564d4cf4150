"""Persistence for Questlog."""

from questlog.storage.local import (
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    PersistedStateCorrupt,
    Storage,
)

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PersistedStateCorrupt",
    "Storage",
]
