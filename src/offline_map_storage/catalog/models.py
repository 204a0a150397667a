"""Catalog domain models.

Both models are Pydantic ``BaseModel`` subclasses whose field aliases match
the compact wire names used in the persisted catalog record::

    {"nextMapId": 2, "maps": {"offline-map-1": {"d": "Hello", "t": 2}}}

Python code uses the descriptive attribute names; ``to_record`` produces
the aliased form.

Classes
-------
- MapInfo  — per-map metadata (description + modification time)
- Catalog  — the allocation counter plus all map metadata
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MapInfo(BaseModel):
    """Metadata stored in the catalog for a single map.

    Parameters
    ----------
    description:
        Human-readable label shown in listings (wire name ``d``).
    modified_at:
        Whole seconds since the Unix epoch of the last modification
        (wire name ``t``).
    """

    description: str = Field(alias="d")
    modified_at: int = Field(alias="t")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_record(self) -> dict[str, Any]:
        """Return the ``{"d": ..., "t": ...}`` form of this entry."""
        return self.model_dump(by_alias=True)


class Catalog(BaseModel):
    """The persisted catalog record.

    Parameters
    ----------
    next_map_id:
        The numeric suffix the next allocated identifier will receive.
        Starts at 1 and only ever grows.
    maps:
        Mapping of map identifier to its ``MapInfo``.
    """

    next_map_id: int = Field(default=1, ge=1, alias="nextMapId")
    maps: dict[str, MapInfo] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    def to_record(self) -> dict[str, Any]:
        """Return the aliased, JSON-ready form of the catalog."""
        return self.model_dump(by_alias=True)
