"""offline-map-storage — local persistence for maps behind an async provider.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import asyncio
>>> from offline_map_storage import StorageConfig, build_adapter
>>> adapter = build_adapter(StorageConfig(backend="memory"))
>>> asyncio.run(adapter.save_map("file content", "new", "notes.mup"))
'offline-map-1'
"""
from __future__ import annotations

# Core
from offline_map_storage.adapter import LoadedMap, OfflineAdapter, description_from_file_name
from offline_map_storage.catalog.index import MapIndex, derive_description
from offline_map_storage.catalog.models import Catalog, MapInfo
from offline_map_storage.config import StorageConfig, build_adapter
from offline_map_storage.events import EventRegistry, MapEvent

# Errors
from offline_map_storage.errors import (
    LOCAL_STORAGE_FAILED,
    NOT_FOUND,
    AdapterError,
    CorruptRecordError,
    MapNotFoundError,
    OfflineStorageError,
    QuotaExceededError,
    StoreWriteError,
)

# Stores
from offline_map_storage.store.base import KeyValueStore
from offline_map_storage.store.filesystem import FilesystemStore
from offline_map_storage.store.json_storage import JsonStorage
from offline_map_storage.store.memory import InMemoryStore
from offline_map_storage.store.redis import RedisStore
from offline_map_storage.store.sqlite import SQLiteStore

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Catalog",
    "EventRegistry",
    "LoadedMap",
    "MapEvent",
    "MapIndex",
    "MapInfo",
    "OfflineAdapter",
    "StorageConfig",
    "build_adapter",
    "derive_description",
    "description_from_file_name",
    # Errors
    "LOCAL_STORAGE_FAILED",
    "NOT_FOUND",
    "AdapterError",
    "CorruptRecordError",
    "MapNotFoundError",
    "OfflineStorageError",
    "QuotaExceededError",
    "StoreWriteError",
    # Stores
    "FilesystemStore",
    "InMemoryStore",
    "JsonStorage",
    "KeyValueStore",
    "RedisStore",
    "SQLiteStore",
]
