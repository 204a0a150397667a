#!/usr/bin/env python3
"""Example: Storage Backends

Demonstrates the same map index running on the in-memory, filesystem and
SQLite key-value stores, and what a full store looks like to callers.

Usage:
    python examples/02_storage_backends.py

Requirements:
    pip install offline-map-storage
"""
from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

from offline_map_storage import (
    AdapterError,
    FilesystemStore,
    InMemoryStore,
    JsonStorage,
    KeyValueStore,
    MapIndex,
    OfflineAdapter,
    SQLiteStore,
)


async def exercise(name: str, store: KeyValueStore) -> None:
    adapter = OfflineAdapter(MapIndex(JsonStorage(store)))
    map_id = await adapter.save_map("file content", "new", f"{name}.mup")
    print(f"[{name}] saved {map_id}; keys now: {sorted(store.keys())}")


async def main() -> None:
    await exercise("memory", InMemoryStore())
    with tempfile.TemporaryDirectory() as tmp:
        await exercise("filesystem", FilesystemStore(storage_dir=Path(tmp) / "maps"))
        await exercise("sqlite", SQLiteStore(db_path=Path(tmp) / "maps.db"))

    tiny = OfflineAdapter(MapIndex(JsonStorage(InMemoryStore(quota_bytes=16))))
    try:
        await tiny.save_map("far too much content for the quota", "new", "big.mup")
    except AdapterError as exc:
        print(f"[quota] save failed with {exc.reason!r}")


if __name__ == "__main__":
    asyncio.run(main())
