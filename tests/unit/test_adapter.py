"""Unit tests for offline_map_storage.adapter.OfflineAdapter.

Covers identifier recognition, the not-found contract of load_map, file
name handling and failure normalisation in save_map.
"""
from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from offline_map_storage.adapter import LoadedMap, OfflineAdapter, description_from_file_name
from offline_map_storage.catalog.index import MapIndex
from offline_map_storage.catalog.models import MapInfo
from offline_map_storage.errors import AdapterError
from offline_map_storage.events import MapEvent
from offline_map_storage.store.filesystem import FilesystemStore
from offline_map_storage.store.json_storage import JsonStorage
from offline_map_storage.store.memory import InMemoryStore


@pytest.fixture()
def adapter(index: MapIndex) -> OfflineAdapter:
    return OfflineAdapter(index)


def _catalog(store: InMemoryStore) -> dict:
    return json.loads(store.get("offline-maps") or "null")


# ---------------------------------------------------------------------------
# recognises
# ---------------------------------------------------------------------------


class TestRecognises:
    def test_recognises_ids_starting_with_o(self, adapter: OfflineAdapter) -> None:
        assert adapter.recognises("oPress+Enter+To+Edit") is True
        assert adapter.recognises("offline-map-1") is True

    def test_rejects_other_providers(self, adapter: OfflineAdapter) -> None:
        assert adapter.recognises("g1234566797977797977") is False
        assert adapter.recognises("alaksjdflajsldkfjlas") is False

    def test_rejects_sentinel_and_malformed(self, adapter: OfflineAdapter) -> None:
        assert adapter.recognises("new") is False
        assert adapter.recognises("") is False
        assert adapter.recognises(None) is False

    def test_does_not_touch_store(self) -> None:
        storage = MagicMock(spec=JsonStorage)
        adapter = OfflineAdapter(MapIndex(storage, "offline"))
        adapter.recognises("offline-map-1")
        assert storage.method_calls == []

    def test_marker_follows_prefix(self, json_storage: JsonStorage) -> None:
        adapter = OfflineAdapter(MapIndex(json_storage, "local"))
        assert adapter.recognises("local-map-1") is True
        assert adapter.recognises("offline-map-1") is False


# ---------------------------------------------------------------------------
# load_map
# ---------------------------------------------------------------------------


class TestLoadMap:
    @pytest.mark.asyncio
    async def test_returns_map_id_and_mime_type(
        self, adapter: OfflineAdapter, store: InMemoryStore
    ) -> None:
        store.set("offline-map-99", '{"map":{"title":"Hello World","id":1}}')
        loaded = await adapter.load_map("offline-map-99")
        assert loaded == LoadedMap(
            content={"title": "Hello World", "id": 1},
            map_id="offline-map-99",
            mime_type="application/json",
        )

    @pytest.mark.asyncio
    async def test_missing_map_fails_with_not_found(self, adapter: OfflineAdapter) -> None:
        with pytest.raises(AdapterError) as excinfo:
            await adapter.load_map("offline-map-999")
        assert excinfo.value.reason == "not-found"
        assert excinfo.value.map_id == "offline-map-999"

    @pytest.mark.asyncio
    async def test_unreadable_record_fails_with_not_found(
        self, adapter: OfflineAdapter, store: InMemoryStore
    ) -> None:
        store.set("offline-map-3", "{broken")
        with pytest.raises(AdapterError) as excinfo:
            await adapter.load_map("offline-map-3")
        assert excinfo.value.reason == "not-found"

    @pytest.mark.asyncio
    async def test_loads_saved_map(self, adapter: OfflineAdapter) -> None:
        map_id = await adapter.save_map("file content", "new", "notes.mup")
        loaded = await adapter.load_map(map_id)
        assert loaded.content == "file content"


# ---------------------------------------------------------------------------
# save_map
# ---------------------------------------------------------------------------


class TestSaveMap:
    @pytest.mark.asyncio
    async def test_saves_map_from_another_provider_under_new_id(
        self, adapter: OfflineAdapter, store: InMemoryStore
    ) -> None:
        map_id = await adapter.save_map("file content", "g123", "file title.mup")
        assert map_id == "offline-map-1"
        assert store.get("offline-map-1") == '{"map":"file content"}'
        assert _catalog(store)["nextMapId"] == 2

    @pytest.mark.asyncio
    async def test_removes_mup_extension_from_file_name(
        self, adapter: OfflineAdapter, store: InMemoryStore
    ) -> None:
        await adapter.save_map("file content", "offline-map-123", "file title.mup")
        assert _catalog(store)["maps"]["offline-map-123"]["d"] == "file title"

    @pytest.mark.asyncio
    async def test_saves_existing_offline_map_in_place(
        self, adapter: OfflineAdapter, store: InMemoryStore
    ) -> None:
        map_id = await adapter.save_map("file content", "offline-map-123", "file title.mup")
        assert map_id == "offline-map-123"
        assert store.get("offline-map-123") == '{"map":"file content"}'

    @pytest.mark.asyncio
    async def test_saves_new_map(self, adapter: OfflineAdapter, store: InMemoryStore) -> None:
        map_id = await adapter.save_map("file content", "new", "file title.mup")
        assert map_id == "offline-map-1"
        assert store.get("offline-map-1") == '{"map":"file content"}'
        assert _catalog(store)["maps"]["offline-map-1"]["d"] == "file title"

    @pytest.mark.asyncio
    async def test_successive_new_maps_get_distinct_ids(self, adapter: OfflineAdapter) -> None:
        first = await adapter.save_map("a", "new", "a.mup")
        second = await adapter.save_map("b", "new", "b.mup")
        assert (first, second) == ("offline-map-1", "offline-map-2")

    @pytest.mark.asyncio
    async def test_description_ignores_embedded_title(self, adapter: OfflineAdapter) -> None:
        map_id = await adapter.save_map('{"title":"inside"}', "new", "outside.mup")
        assert adapter.index.list()[map_id].description == "outside"

    @pytest.mark.asyncio
    async def test_timestamp_is_current_time(self, adapter: OfflineAdapter, clock) -> None:
        clock.tick(5000)
        map_id = await adapter.save_map("x", "new", "x.mup")
        assert adapter.index.list()[map_id].modified_at == 5

    @pytest.mark.asyncio
    async def test_dispatches_restored_event(self, adapter: OfflineAdapter) -> None:
        listener = MagicMock()
        adapter.index.add_listener(MapEvent.RESTORED, listener)
        await adapter.save_map("file content", "new", "file title.mup")
        listener.assert_called_once_with(
            "offline-map-1", "file content", MapInfo(description="file title", modified_at=0)
        )

    @pytest.mark.asyncio
    async def test_fails_with_local_storage_failed_when_store_throws(
        self, adapter: OfflineAdapter, json_storage: JsonStorage
    ) -> None:
        with patch.object(json_storage, "set_item", side_effect=Exception("Quota exceeded")):
            with pytest.raises(AdapterError) as excinfo:
                await adapter.save_map("file content", "new", "file title.mup")
        assert excinfo.value.reason == "local-storage-failed"
        assert excinfo.value.__cause__ is None
        assert excinfo.value.__suppress_context__ is True

    @pytest.mark.asyncio
    async def test_quota_exhaustion_is_normalised(self, clock) -> None:
        store = InMemoryStore(quota_bytes=30)
        adapter = OfflineAdapter(MapIndex(JsonStorage(store), "offline", clock=clock))
        with pytest.raises(AdapterError) as excinfo:
            await adapter.save_map("x" * 100, "new", "big.mup")
        assert str(excinfo.value) == "local-storage-failed"
        assert store.keys() == []

    @pytest.mark.asyncio
    async def test_corrupt_catalog_fails_with_local_storage_failed(
        self, adapter: OfflineAdapter, store: InMemoryStore
    ) -> None:
        store.set("offline-maps", "[]")
        with pytest.raises(AdapterError) as excinfo:
            await adapter.save_map("file content", "offline-map-1", "a.mup")
        assert excinfo.value.reason == "local-storage-failed"


class TestSaveMapOnFilesystem:
    @pytest.fixture()
    def fs_adapter(self, tmp_path: Path, clock) -> OfflineAdapter:
        store = FilesystemStore(storage_dir=tmp_path / "maps")
        return OfflineAdapter(MapIndex(JsonStorage(store), "offline", clock=clock))

    @pytest.mark.asyncio
    async def test_id_with_separator_does_not_overwrite_other_map(
        self, fs_adapter: OfflineAdapter
    ) -> None:
        first = await fs_adapter.save_map("first", "new", "a.mup")
        other = await fs_adapter.save_map("second", "oa/offline-map-1", "b.mup")
        assert other == "oa/offline-map-1"
        assert (await fs_adapter.load_map(first)).content == "first"
        assert (await fs_adapter.load_map(other)).content == "second"

    @pytest.mark.asyncio
    async def test_removing_lookalike_id_keeps_catalog_consistent(
        self, fs_adapter: OfflineAdapter
    ) -> None:
        first = await fs_adapter.save_map("first", "new", "a.mup")
        await fs_adapter.save_map("second", "oa/offline-map-1", "b.mup")
        fs_adapter.index.remove("oa/offline-map-1")
        assert list(fs_adapter.index.list()) == [first]
        assert (await fs_adapter.load_map(first)).content == "first"


# ---------------------------------------------------------------------------
# description_from_file_name
# ---------------------------------------------------------------------------


class TestDescriptionFromFileName:
    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("file title.mup", "file title"),
            ("file title", "file title"),
            ("archive.mup.mup", "archive.mup"),
            ("SHOUT.MUP", "SHOUT.MUP"),
            ("notes.mup.txt", "notes.mup.txt"),
            (".mup", ""),
        ],
    )
    def test_strips_single_trailing_extension(self, file_name: str, expected: str) -> None:
        assert description_from_file_name(file_name) == expected
