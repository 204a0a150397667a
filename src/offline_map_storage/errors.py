"""Exception taxonomy for offline-map-storage.

The index layer raises ``MapNotFoundError`` and ``CorruptRecordError`` and
lets store-level failures propagate unchanged.  ``OfflineAdapter`` is the
single place where failures are normalised into an ``AdapterError`` whose
``reason`` is one of the module-level reason constants.

Classes
-------
- OfflineStorageError  — base class for every error raised by this package
- MapNotFoundError     — no map stored under the requested identifier
- CorruptRecordError   — a stored record cannot be decoded
- StoreWriteError      — a key-value store refused a write
- QuotaExceededError   — a store ran out of capacity
- AdapterError         — normalised failure surfaced by the adapter
"""
from __future__ import annotations

NOT_FOUND = "not-found"
LOCAL_STORAGE_FAILED = "local-storage-failed"


class OfflineStorageError(Exception):
    """Base class for all offline-map-storage errors."""


class MapNotFoundError(OfflineStorageError, KeyError):
    """Raised when a requested map does not exist in the index."""

    def __init__(self, map_id: str) -> None:
        self.map_id = map_id
        super().__init__(f"Map {map_id!r} not found.")

    def __str__(self) -> str:
        return str(self.args[0])


class CorruptRecordError(OfflineStorageError, ValueError):
    """Raised when a stored record is not valid JSON or has the wrong shape."""

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        message = f"Record {key!r} is corrupted."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class StoreWriteError(OfflineStorageError, OSError):
    """Raised by a key-value store when a write cannot be completed."""


class QuotaExceededError(StoreWriteError):
    """Raised when a write would take a store past its capacity."""

    def __init__(self, key: str, quota_bytes: int) -> None:
        self.key = key
        self.quota_bytes = quota_bytes
        super().__init__(
            f"Writing {key!r} would exceed the storage quota of {quota_bytes} bytes."
        )


class AdapterError(OfflineStorageError):
    """Normalised failure raised from ``OfflineAdapter`` coroutines.

    Parameters
    ----------
    reason:
        Either ``"not-found"`` or ``"local-storage-failed"``.
    map_id:
        The identifier involved, when known.
    """

    def __init__(self, reason: str, map_id: str | None = None) -> None:
        self.reason = reason
        self.map_id = map_id
        super().__init__(reason)


__all__ = [
    "LOCAL_STORAGE_FAILED",
    "NOT_FOUND",
    "AdapterError",
    "CorruptRecordError",
    "MapNotFoundError",
    "OfflineStorageError",
    "QuotaExceededError",
    "StoreWriteError",
]
