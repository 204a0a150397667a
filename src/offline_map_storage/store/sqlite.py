"""SQLite key-value store.

Stores every key in a single SQLite database file using the standard
library ``sqlite3`` module.

Classes
-------
- SQLiteStore  — SQLite-backed key-value storage
"""
from __future__ import annotations

import sqlite3
from pathlib import Path

from offline_map_storage.store.base import KeyValueStore

_DEFAULT_DB_PATH: Path = Path.home() / ".offline-maps" / "maps.db"
_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
)
"""
_UPSERT_SQL = """
INSERT INTO kv (key, value, updated_at)
VALUES (?, ?, datetime('now'))
ON CONFLICT(key) DO UPDATE SET
    value      = excluded.value,
    updated_at = excluded.updated_at
"""


class SQLiteStore(KeyValueStore):
    """Persists values in a local SQLite database, one row per key.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Defaults to ``~/.offline-maps/maps.db``.
        The parent directory and table are created automatically.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        self._db_path: Path = Path(db_path) if db_path is not None else _DEFAULT_DB_PATH

    def _get_connection(self) -> sqlite3.Connection:
        """Open a connection and make sure the table exists."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        conn.execute(_CREATE_TABLE_SQL)
        conn.commit()
        return conn

    # ------------------------------------------------------------------
    # KeyValueStore interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the value row for ``key``, or None."""
        conn = self._get_connection()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return None if row is None else str(row["value"])

    def set(self, key: str, value: str) -> None:
        """Upsert ``value`` for ``key``.  ``sqlite3.Error`` propagates."""
        conn = self._get_connection()
        try:
            with conn:
                conn.execute(_UPSERT_SQL, (key, value))
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        """Delete the row for ``key`` if present."""
        conn = self._get_connection()
        try:
            with conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        finally:
            conn.close()

    def keys(self) -> list[str]:
        """Return all keys, most recently written first."""
        conn = self._get_connection()
        try:
            rows = conn.execute("SELECT key FROM kv ORDER BY updated_at DESC").fetchall()
        finally:
            conn.close()
        return [str(row["key"]) for row in rows]

    def __repr__(self) -> str:
        return f"SQLiteStore(db_path={str(self._db_path)!r})"
