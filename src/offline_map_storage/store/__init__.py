"""Key-value store subpackage.

All stores implement the ``KeyValueStore`` ABC.  ``RedisStore`` guards its
third-party import so that the package remains installable without the
``redis`` extra.

Public surface
--------------
- KeyValueStore    — abstract base class
- JsonStorage      — JSON record layer used by the map index
- InMemoryStore    — in-process dict with an optional quota
- FilesystemStore  — one file per key
- SQLiteStore      — one SQLite row per key
- RedisStore       — Redis strings (requires ``redis`` package)
"""
from __future__ import annotations

from offline_map_storage.store.base import KeyValueStore
from offline_map_storage.store.filesystem import FilesystemStore
from offline_map_storage.store.json_storage import JsonStorage
from offline_map_storage.store.memory import InMemoryStore
from offline_map_storage.store.redis import RedisStore
from offline_map_storage.store.sqlite import SQLiteStore

__all__ = [
    "FilesystemStore",
    "InMemoryStore",
    "JsonStorage",
    "KeyValueStore",
    "RedisStore",
    "SQLiteStore",
]
