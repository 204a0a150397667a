#!/usr/bin/env python3
"""Example: Quickstart — offline-map-storage

Minimal working example: save a map through the adapter, list the
catalog, load the map back and react to deletions.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install offline-map-storage
"""
from __future__ import annotations

import asyncio

import offline_map_storage
from offline_map_storage import AdapterError, MapEvent, StorageConfig, build_adapter


async def main() -> None:
    print(f"offline-map-storage version: {offline_map_storage.__version__}")

    # Step 1: Build an adapter over an in-memory store
    adapter = build_adapter(StorageConfig(backend="memory"))

    # Step 2: Save a new map; the description comes from the file name
    map_id = await adapter.save_map('{"title": "Q3 plan"}', "new", "quarterly plan.mup")
    print(f"Saved as {map_id}")

    # Step 3: List the catalog
    for listed_id, info in adapter.index.list().items():
        print(f"  {listed_id}: {info.description!r} (t={info.modified_at})")

    # Step 4: Load it back
    loaded = await adapter.load_map(map_id)
    print(f"Loaded {loaded.map_id} ({loaded.mime_type}): {loaded.content}")

    # Step 5: Observe deletions
    adapter.index.add_listener(MapEvent.DELETED, lambda deleted: print(f"Deleted {deleted}"))
    adapter.index.remove(map_id)

    try:
        await adapter.load_map(map_id)
    except AdapterError as exc:
        print(f"Loading again fails with {exc.reason!r}")


if __name__ == "__main__":
    asyncio.run(main())
