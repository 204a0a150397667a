"""Asynchronous storage-provider adapter for offline maps.

``OfflineAdapter`` is the object a multi-backend dispatcher talks to.  It
decides which identifiers belong to the offline store, turns file names into
descriptions, and wraps the synchronous ``MapIndex`` in coroutines whose
only failure mode is an ``AdapterError`` carrying a normalised reason.

The underlying work always completes synchronously; the coroutines exist so
that this backend composes with genuinely asynchronous (network-backed)
providers behind the same interface.

Classes
-------
- LoadedMap       — result of a successful ``load_map``
- OfflineAdapter  — provider facade over a MapIndex
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from offline_map_storage.catalog.index import MapIndex
from offline_map_storage.catalog.models import MapInfo
from offline_map_storage.errors import (
    LOCAL_STORAGE_FAILED,
    NOT_FOUND,
    AdapterError,
    CorruptRecordError,
    MapNotFoundError,
)

logger = logging.getLogger(__name__)

NEW_MAP_ID = "new"
MAP_FILE_EXTENSION = ".mup"
MAP_MIME_TYPE = "application/json"


def description_from_file_name(file_name: str) -> str:
    """Strip a single trailing ``.mup`` (case-sensitive) from ``file_name``."""
    if file_name.endswith(MAP_FILE_EXTENSION):
        return file_name[: -len(MAP_FILE_EXTENSION)]
    return file_name


@dataclass(frozen=True)
class LoadedMap:
    """A map returned by ``OfflineAdapter.load_map``.

    Parameters
    ----------
    content:
        The stored payload, exactly as it was saved.
    map_id:
        The identifier it was loaded from.
    mime_type:
        Media type of the document.
    """

    content: Any
    map_id: str
    mime_type: str = MAP_MIME_TYPE


class OfflineAdapter:
    """Storage provider for maps kept in the local key-value store.

    Parameters
    ----------
    index:
        The map index that owns the catalog and content records.
    """

    description = "OFFLINE"
    not_sharable = True
    mime_type = MAP_MIME_TYPE

    def __init__(self, index: MapIndex) -> None:
        self._index = index
        self.id_marker: str = index.prefix[0]

    @property
    def index(self) -> MapIndex:
        """The wrapped ``MapIndex``."""
        return self._index

    def recognises(self, map_id: str | None) -> bool:
        """Return True if ``map_id`` belongs to this provider.

        Offline identifiers start with the first character of the index
        prefix (``"o"`` for the default ``offline`` prefix).  The store is
        never consulted.
        """
        return isinstance(map_id, str) and map_id.startswith(self.id_marker)

    async def load_map(self, map_id: str) -> LoadedMap:
        """Load the map stored at ``map_id``.

        Raises
        ------
        AdapterError
            With reason ``"not-found"`` if there is no readable content
            record for ``map_id``.
        """
        try:
            content = self._index.load(map_id)
        except MapNotFoundError:
            raise AdapterError(NOT_FOUND, map_id) from None
        except CorruptRecordError as exc:
            logger.warning("OfflineAdapter: unreadable record for %r: %s", map_id, exc)
            raise AdapterError(NOT_FOUND, map_id) from None
        return LoadedMap(content=content, map_id=map_id, mime_type=self.mime_type)

    async def save_map(self, content: Any, map_id: str, file_name: str) -> str:
        """Persist ``content`` and return the identifier it was written to.

        The description is ``file_name`` without its ``.mup`` extension.
        When ``map_id`` is ``"new"`` or belongs to another provider a fresh
        identifier is allocated; otherwise ``map_id`` is overwritten.  Both
        paths store the description verbatim instead of deriving it from
        the content, which may not be in this backend's structured format.

        Raises
        ------
        AdapterError
            With reason ``"local-storage-failed"`` if the store rejects any
            write.  The underlying exception is logged, not chained.
        """
        description = description_from_file_name(file_name)
        try:
            if map_id == NEW_MAP_ID or not self.recognises(map_id):
                target_id = self._index.next_free_map_id()
            else:
                target_id = map_id
            info = MapInfo(description=description, modified_at=self._index.now())
            self._index.restore(target_id, content, info)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "OfflineAdapter: saving %r as %r failed: %s", map_id, description, exc
            )
            raise AdapterError(LOCAL_STORAGE_FAILED, map_id) from None
        logger.debug("OfflineAdapter: saved %r as %r", target_id, description)
        return target_id

    def __repr__(self) -> str:
        return f"OfflineAdapter(index={self._index!r})"
