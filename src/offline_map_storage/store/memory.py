"""In-memory key-value store.

Keeps values in a plain Python dict.  All data is lost when the process
exits.  An optional byte quota emulates the capacity limit of browser-style
local storage, which makes the store useful for exercising write failures.

Classes
-------
- InMemoryStore  — dict-backed ephemeral store
"""
from __future__ import annotations

from offline_map_storage.errors import QuotaExceededError
from offline_map_storage.store.base import KeyValueStore


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class InMemoryStore(KeyValueStore):
    """Ephemeral, in-process store backed by a Python dict.

    Parameters
    ----------
    initial_data:
        Optional pre-populated mapping of keys to raw values.  A shallow
        copy is taken so the caller's dict is not mutated.
    quota_bytes:
        Optional capacity limit.  The size of the store is the UTF-8 length
        of every key plus every value; a ``set`` that would push it past the
        quota raises ``QuotaExceededError`` and leaves the store unchanged.
    """

    def __init__(
        self,
        initial_data: dict[str, str] | None = None,
        quota_bytes: int | None = None,
    ) -> None:
        self._store: dict[str, str] = dict(initial_data or {})
        self._quota_bytes = quota_bytes

    # ------------------------------------------------------------------
    # KeyValueStore interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None."""
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting if present.

        Raises
        ------
        QuotaExceededError
            If a quota is configured and the write would exceed it.
        """
        if self._quota_bytes is not None:
            current = self._store.get(key)
            projected = self.size_bytes() + _entry_size(key, value)
            if current is not None:
                projected -= _entry_size(key, current)
            if projected > self._quota_bytes:
                raise QuotaExceededError(key, self._quota_bytes)
        self._store[key] = value

    def remove(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        """Return all keys in insertion order."""
        return list(self._store)

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def size_bytes(self) -> int:
        """Return the current size of the store as counted against the quota."""
        return sum(_entry_size(k, v) for k, v in self._store.items())

    def clear(self) -> None:
        """Remove every key."""
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"InMemoryStore(keys={len(self._store)}, quota_bytes={self._quota_bytes!r})"
