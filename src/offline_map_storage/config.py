"""Storage configuration.

``StorageConfig`` describes which key-value store to use and how the map
index namespaces its keys.  It can be built in code, from keyword options
(as the CLI does) or from a YAML file::

    backend: sqlite
    path: ~/.offline-maps/maps.db
    prefix: offline

Classes
-------
- StorageConfig  — validated settings for building a store and adapter

Functions
---------
- build_adapter  — wire store → JSON storage → index → adapter
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Literal

import yaml
from pydantic import BaseModel, Field

from offline_map_storage.adapter import OfflineAdapter
from offline_map_storage.catalog.index import MapIndex
from offline_map_storage.store.base import KeyValueStore
from offline_map_storage.store.filesystem import FilesystemStore
from offline_map_storage.store.json_storage import JsonStorage
from offline_map_storage.store.memory import InMemoryStore
from offline_map_storage.store.redis import RedisStore
from offline_map_storage.store.sqlite import SQLiteStore

BackendName = Literal["memory", "filesystem", "sqlite", "redis"]


class StorageConfig(BaseModel):
    """Settings for the offline map store.

    Parameters
    ----------
    backend:
        Which ``KeyValueStore`` to build.  Default: ``"filesystem"``.
    path:
        Directory (filesystem) or database file (sqlite).  ``None`` uses
        the store's own default under ``~/.offline-maps``.
    prefix:
        Namespace for identifiers and the catalog key.  Default:
        ``"offline"``.
    redis_url:
        Connection URL for the redis backend.
    quota_bytes:
        Capacity limit for the memory backend.  ``None`` means unlimited.
    """

    backend: BackendName = "filesystem"
    path: Path | None = None
    prefix: str = Field(default="offline", min_length=1)
    redis_url: str = "redis://localhost:6379/0"
    quota_bytes: int | None = Field(default=None, ge=0)

    model_config = {"frozen": True}

    @classmethod
    def from_yaml(cls, path: str | Path) -> StorageConfig:
        """Load settings from a YAML mapping.

        Raises
        ------
        ValueError
            If the document is not a mapping.
        pydantic.ValidationError
            If a setting has an invalid value.
        """
        with Path(path).open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {str(path)!r} must contain a mapping.")
        return cls.model_validate(data)

    def build_store(self) -> KeyValueStore:
        """Instantiate the configured key-value store."""
        path = self.path.expanduser() if self.path is not None else None
        if self.backend == "memory":
            return InMemoryStore(quota_bytes=self.quota_bytes)
        if self.backend == "filesystem":
            return FilesystemStore(storage_dir=path)
        if self.backend == "sqlite":
            return SQLiteStore(db_path=path)
        return RedisStore(url=self.redis_url)


def build_adapter(
    config: StorageConfig | None = None,
    clock: Callable[[], float] | None = None,
) -> OfflineAdapter:
    """Return an ``OfflineAdapter`` over the store described by ``config``."""
    config = config or StorageConfig()
    index = MapIndex(JsonStorage(config.build_store()), prefix=config.prefix, clock=clock)
    return OfflineAdapter(index)


__all__ = ["BackendName", "StorageConfig", "build_adapter"]
