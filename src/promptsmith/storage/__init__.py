"""Key-value storage backends."""

from .backends import (
    KeyValueStore,
    MemoryKeyValueStore,
    FileKeyValueStore,
    create_store,
)

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "FileKeyValueStore",
    "create_store",
]
