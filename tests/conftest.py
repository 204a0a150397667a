"""Shared fixtures for the offline-map-storage test suite."""
from __future__ import annotations

import pytest

from offline_map_storage.catalog.index import MapIndex
from offline_map_storage.store.json_storage import JsonStorage
from offline_map_storage.store.memory import InMemoryStore


class FakeClock:
    """Controllable replacement for ``time.time`` starting at the epoch."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def tick(self, milliseconds: int) -> None:
        self.now += milliseconds / 1000

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def json_storage(store: InMemoryStore) -> JsonStorage:
    return JsonStorage(store)


@pytest.fixture()
def index(json_storage: JsonStorage, clock: FakeClock) -> MapIndex:
    return MapIndex(json_storage, "offline", clock=clock)
