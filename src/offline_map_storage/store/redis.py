"""Redis key-value store.

Import-guarded: ``redis`` is an optional dependency.  Instantiating
``RedisStore`` without the ``redis`` package installed raises
``ImportError`` with an install hint.

Classes
-------
- RedisStore  — Redis string-per-key storage
"""
from __future__ import annotations

from offline_map_storage.store.base import KeyValueStore

_REDIS_IMPORT_ERROR = (
    "The 'redis' package is required for RedisStore. "
    "Install it with: pip install redis"
)


class RedisStore(KeyValueStore):
    """Persists values as Redis strings under ``<key_prefix><key>``.

    Parameters
    ----------
    url:
        Redis connection URL.  Defaults to ``"redis://localhost:6379/0"``.
    key_prefix:
        String prepended to every key.  Defaults to ``"offline_maps:"``.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        key_prefix: str = "offline_maps:",
    ) -> None:
        try:
            import redis as redis_module  # noqa: PLC0415
        except ImportError as exc:
            raise ImportError(_REDIS_IMPORT_ERROR) from exc

        self._client = redis_module.Redis.from_url(url, decode_responses=True)
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    # ------------------------------------------------------------------
    # KeyValueStore interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None."""
        value = self._client.get(self._key(key))
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        """Write ``value`` under the prefixed key.

        ``redis.exceptions.RedisError`` (including out-of-memory replies)
        propagates.
        """
        self._client.set(self._key(key), value)

    def remove(self, key: str) -> None:
        """Delete the prefixed key if present."""
        self._client.delete(self._key(key))

    def keys(self) -> list[str]:
        """Return all keys under the configured prefix using SCAN."""
        prefix_len = len(self._key_prefix)
        found: list[str] = []
        cursor: int = 0
        while True:
            cursor, batch = self._client.scan(cursor=cursor, match=f"{self._key_prefix}*", count=100)
            found.extend(str(k)[prefix_len:] for k in batch)
            if cursor == 0:
                break
        return found

    def __repr__(self) -> str:
        return f"RedisStore(key_prefix={self._key_prefix!r})"
