"""JSON record layer over a raw key-value store.

Values are encoded as compact JSON (no whitespace, non-ASCII kept as-is,
key order preserved) so that persisted strings are byte-for-byte stable.

Classes
-------
- JsonStorage  — get/set/remove JSON values on top of a KeyValueStore
"""
from __future__ import annotations

import json
from typing import Any

from offline_map_storage.errors import CorruptRecordError
from offline_map_storage.store.base import KeyValueStore


def encode(value: Any) -> str:
    """Serialise ``value`` to the compact JSON form used for every record."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class JsonStorage:
    """Read and write JSON-encoded values through a ``KeyValueStore``.

    Parameters
    ----------
    store:
        The underlying raw string store.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        """The wrapped raw store."""
        return self._store

    def get_item(self, key: str) -> Any:
        """Return the decoded value for ``key``, or None if absent.

        Raises
        ------
        CorruptRecordError
            If the stored string is not valid JSON.
        """
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(key, str(exc)) from exc

    def has_item(self, key: str) -> bool:
        """Return True if a value is stored under ``key``, without decoding it."""
        return self._store.get(key) is not None

    def set_item(self, key: str, value: Any) -> None:
        """Encode ``value`` and write it under ``key``."""
        self._store.set(key, encode(value))

    def remove_item(self, key: str) -> None:
        """Remove ``key`` from the underlying store."""
        self._store.remove(key)

    def __repr__(self) -> str:
        return f"JsonStorage(store={self._store!r})"
