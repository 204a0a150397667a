"""Abstract base class for key-value stores.

A store is the raw persistence primitive underneath the map index: string
keys mapped to string values.  Writes may fail (for example when a quota is
exhausted); such failures are raised to the caller and never swallowed.

Classes
-------
- KeyValueStore  — abstract base for all stores
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Protocol for reading and writing raw string values by key.

    Implementations must be safe for sequential (single-threaded) use.
    Thread-safety is the responsibility of the caller.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any existing value.

        Raises
        ------
        StoreWriteError
            If the store cannot accept the write.  Concrete stores may
            also raise the native error of their underlying driver.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``.  Removing a missing key is a no-op."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every key currently in the store.

        Order is implementation-defined.
        """
