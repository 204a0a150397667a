"""Catalog subpackage: metadata models and the map index."""
from __future__ import annotations

from offline_map_storage.catalog.index import MapIndex
from offline_map_storage.catalog.models import Catalog, MapInfo

__all__ = ["Catalog", "MapIndex", "MapInfo"]
