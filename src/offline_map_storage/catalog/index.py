"""Map index: identifier allocation, catalog metadata and content records.

``MapIndex`` is the sole owner of two kinds of record in a ``JsonStorage``:

- the catalog, under ``<prefix>-maps``, holding the allocation counter and
  a ``MapInfo`` per map;
- one content record per map, under the map identifier itself, holding
  ``{"map": <content exactly as supplied>}``.

Every write stores the content record before the catalog record.  There is
no rollback between the two: if the second write fails the store is left
with an orphaned content record, never with a catalog entry pointing at
missing content.

Store errors propagate unchanged; callers that need a normalised error
contract should go through ``OfflineAdapter``.

Classes
-------
- MapIndex  — CRUD facade over the catalog and content records
"""
from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Mapping
from typing import Any, Callable

from pydantic import ValidationError

from offline_map_storage.catalog.models import Catalog, MapInfo
from offline_map_storage.errors import CorruptRecordError, MapNotFoundError
from offline_map_storage.events import EventRegistry, Listener, MapEvent
from offline_map_storage.store.json_storage import JsonStorage

logger = logging.getLogger(__name__)

_DEFAULT_PREFIX = "offline"


def derive_description(content: Any) -> str:
    """Return the ``title`` of a structured map, or ``""``.

    ``content`` may be a mapping or a string holding a JSON object.  Any
    other payload (plain text, JSON arrays, objects without a string title)
    yields the empty string.
    """
    document = content
    if isinstance(content, (str, bytes, bytearray)):
        try:
            document = json.loads(content)
        except ValueError:
            logger.debug("derive_description: content is not JSON, using empty description")
            return ""
    if isinstance(document, Mapping):
        title = document.get("title")
        if isinstance(title, str):
            return title
    return ""


class MapIndex:
    """Allocate identifiers and persist maps together with their metadata.

    Parameters
    ----------
    storage:
        JSON record layer over the underlying key-value store.
    prefix:
        Namespace for every key this index writes.  Identifiers take the
        form ``<prefix>-map-<n>`` and the catalog lives at
        ``<prefix>-maps``.
    clock:
        Zero-argument callable returning seconds since the epoch.
        Defaults to ``time.time``; timestamps are truncated to whole
        seconds.
    """

    def __init__(
        self,
        storage: JsonStorage,
        prefix: str = _DEFAULT_PREFIX,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if not prefix:
            raise ValueError("prefix must be a non-empty string.")
        self._storage = storage
        self._prefix = prefix
        self._catalog_key = f"{prefix}-maps"
        self._id_pattern = re.compile(rf"{re.escape(prefix)}-map-(\d+)")
        self._clock = clock or time.time
        self._events = EventRegistry()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def prefix(self) -> str:
        """Namespace prefix for identifiers and the catalog key."""
        return self._prefix

    @property
    def catalog_key(self) -> str:
        """Store key of the catalog record."""
        return self._catalog_key

    @property
    def events(self) -> EventRegistry:
        """Registry of ``restored`` / ``deleted`` listeners."""
        return self._events

    @property
    def next_map_id(self) -> int:
        """The numeric suffix the next ``save_new`` call will use."""
        return self._read_catalog().next_map_id

    # ------------------------------------------------------------------
    # Clock and allocation
    # ------------------------------------------------------------------

    def now(self) -> int:
        """Return the index clock's current time in whole seconds."""
        return int(self._clock())

    def next_free_map_id(self) -> str:
        """Return the identifier the next allocation will receive.

        Nothing is reserved; the counter only advances when a map is
        actually written under this identifier.
        """
        return self._map_id_for(self.next_map_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _map_id_for(self, number: int) -> str:
        return f"{self._prefix}-map-{number}"

    def _read_catalog(self) -> Catalog:
        raw = self._storage.get_item(self._catalog_key)
        if raw is None:
            return Catalog()
        try:
            return Catalog.model_validate(raw)
        except ValidationError as exc:
            raise CorruptRecordError(self._catalog_key, "Catalog has an invalid shape.") from exc

    def _write_catalog(self, catalog: Catalog) -> None:
        self._storage.set_item(self._catalog_key, catalog.to_record())

    def _write_entry(self, map_id: str, content: Any, info: MapInfo, catalog: Catalog) -> None:
        self._storage.set_item(map_id, {"map": content})
        catalog.maps[map_id] = info
        self._write_catalog(catalog)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_new(self, content: Any) -> str:
        """Store ``content`` under a freshly allocated identifier.

        The description is derived from the content's ``title`` and the
        modification time is set to now.

        Parameters
        ----------
        content:
            A JSON string or JSON-compatible value, stored verbatim.

        Returns
        -------
        str
            The new identifier, e.g. ``"offline-map-1"``.
        """
        catalog = self._read_catalog()
        map_id = self._map_id_for(catalog.next_map_id)
        catalog.next_map_id += 1
        info = MapInfo(description=derive_description(content), modified_at=self.now())
        self._write_entry(map_id, content, info, catalog)
        logger.debug("MapIndex: allocated %r (%r)", map_id, info.description)
        return map_id

    def save(self, map_id: str, content: Any) -> None:
        """Overwrite the content of an existing map.

        The description is re-derived from the content and the
        modification time is set to now.

        Raises
        ------
        MapNotFoundError
            If ``map_id`` is not in the catalog.
        """
        catalog = self._read_catalog()
        if map_id not in catalog.maps:
            raise MapNotFoundError(map_id)
        info = MapInfo(description=derive_description(content), modified_at=self.now())
        self._write_entry(map_id, content, info, catalog)
        logger.debug("MapIndex: saved %r (%r)", map_id, info.description)

    def restore(self, map_id: str, content: Any, info: MapInfo | Mapping[str, Any]) -> None:
        """Store ``content`` at ``map_id`` with caller-supplied metadata.

        Unlike ``save``, nothing is derived from the content: the
        description and timestamp are written exactly as given, and the
        entry is created if it does not exist yet.  When ``map_id`` is one
        of this index's own ``<prefix>-map-<n>`` identifiers the allocation
        counter is advanced past ``n``.

        Emits ``MapEvent.RESTORED`` with ``(map_id, content, info)`` after
        both records are written.

        Parameters
        ----------
        map_id:
            Identifier to write.
        content:
            Payload to store verbatim.
        info:
            A ``MapInfo`` or a mapping accepted by ``MapInfo`` (either the
            ``d`` / ``t`` wire keys or the attribute names).
        """
        if not isinstance(info, MapInfo):
            info = MapInfo.model_validate(info)
        catalog = self._read_catalog()
        match = self._id_pattern.fullmatch(map_id)
        if match is not None and int(match.group(1)) >= catalog.next_map_id:
            catalog.next_map_id = int(match.group(1)) + 1
        self._write_entry(map_id, content, info, catalog)
        logger.debug("MapIndex: restored %r (%r, t=%d)", map_id, info.description, info.modified_at)
        self._events.dispatch(MapEvent.RESTORED, map_id, content, info)

    def remove(self, map_id: str) -> bool:
        """Delete the content record and catalog entry for ``map_id``.

        Emits ``MapEvent.DELETED`` with ``(map_id,)``.  Removing an
        identifier with neither a catalog entry nor a content record is a
        no-op and emits nothing.

        Returns
        -------
        bool
            True if anything was removed, False for the no-op case.
        """
        catalog = self._read_catalog()
        in_catalog = map_id in catalog.maps
        if not in_catalog and not self._storage.has_item(map_id):
            logger.debug("MapIndex: remove(%r) ignored, no such map", map_id)
            return False
        self._storage.remove_item(map_id)
        if in_catalog:
            del catalog.maps[map_id]
            self._write_catalog(catalog)
        logger.debug("MapIndex: removed %r", map_id)
        self._events.dispatch(MapEvent.DELETED, map_id)
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> dict[str, MapInfo]:
        """Return every catalog entry keyed by identifier, without content."""
        return dict(self._read_catalog().maps)

    def load(self, map_id: str) -> Any:
        """Return the content stored for ``map_id`` exactly as it was saved.

        Raises
        ------
        MapNotFoundError
            If no content record exists for ``map_id``.
        CorruptRecordError
            If the record exists but is not a ``{"map": ...}`` object.
        """
        record = self._storage.get_item(map_id)
        if record is None:
            raise MapNotFoundError(map_id)
        if not isinstance(record, dict) or "map" not in record:
            raise CorruptRecordError(map_id, "Expected an object with a 'map' field.")
        return record["map"]

    def contains(self, map_id: str) -> bool:
        """Return True if ``map_id`` has a catalog entry."""
        return map_id in self._read_catalog().maps

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def add_listener(self, event: MapEvent | str, listener: Listener) -> None:
        """Register ``listener`` for ``event`` (``"restored"`` or ``"deleted"``)."""
        self._events.add_listener(event, listener)

    def remove_listener(self, event: MapEvent | str, listener: Listener) -> None:
        """Unregister ``listener`` for ``event``."""
        self._events.remove_listener(event, listener)

    def __repr__(self) -> str:
        return f"MapIndex(prefix={self._prefix!r}, storage={self._storage!r})"
