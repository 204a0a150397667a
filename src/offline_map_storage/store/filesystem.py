"""Filesystem key-value store.

Persists each key as an individual file under a configurable directory.
Defaults to ``~/.offline-maps/``.

Classes
-------
- FilesystemStore  — file-per-key storage
"""
from __future__ import annotations

from pathlib import Path
from urllib.parse import quote, unquote

from offline_map_storage.store.base import KeyValueStore

_DEFAULT_STORAGE_DIR: Path = Path.home() / ".offline-maps"
_FILE_EXTENSION = ".json"


class FilesystemStore(KeyValueStore):
    """Stores each value in ``<storage_dir>/<percent-encoded key>.json``.

    Parameters
    ----------
    storage_dir:
        Root directory for the files.  Defaults to ``~/.offline-maps/``.
        Created on first write if absent.
    """

    def __init__(self, storage_dir: str | Path | None = None) -> None:
        self._storage_dir: Path = (
            Path(storage_dir) if storage_dir is not None else _DEFAULT_STORAGE_DIR
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        # Percent-encoding keeps the key-to-file mapping one-to-one and
        # leaves no path separators in the file name.
        if not key:
            raise ValueError("Storage key must be a non-empty string.")
        return self._storage_dir / f"{quote(key, safe='')}{_FILE_EXTENSION}"

    # ------------------------------------------------------------------
    # KeyValueStore interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the file contents for ``key``, or None if the file is absent."""
        path = self._path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write ``value`` to the file for ``key``.

        The directory is created if it does not yet exist.  ``OSError``
        (disk full, permissions) propagates to the caller.
        """
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        self._path_for(key).write_text(value, encoding="utf-8")

    def remove(self, key: str) -> None:
        """Delete the file for ``key`` if it exists."""
        self._path_for(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        """Return keys derived from the file stems in the storage directory."""
        if not self._storage_dir.exists():
            return []
        return [
            unquote(path.stem)
            for path in self._storage_dir.glob(f"*{_FILE_EXTENSION}")
            if path.is_file()
        ]

    def __repr__(self) -> str:
        return f"FilesystemStore(storage_dir={str(self._storage_dir)!r})"
