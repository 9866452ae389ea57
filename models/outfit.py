"""Saved outfit model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.closet_item import _ensure_list, _now_ms, _optional_int


@dataclass
class Outfit:
    """A named outfit the user kept.

    Items are referenced by id so edits to a garment show up in every outfit
    that contains it.
    """

    name: str
    outfit_id: Optional[str] = None
    item_ids: List[str] = field(default_factory=list)
    notes: Optional[str] = None
    created_at: int = field(default_factory=_now_ms)

    def __post_init__(self) -> None:
        if not str(self.name).strip():
            raise ValueError("Outfit name must not be blank")
        self.name = str(self.name)
        self.item_ids = [str(item_id) for item_id in _ensure_list(self.item_ids) if item_id is not None]


def outfit_from_raw(metadata: Dict[str, Any]) -> Outfit:
    """Build an :class:`Outfit` from a storage row or client record."""

    name = metadata.get("name")
    if name is None or not str(name).strip():
        raise ValueError("Missing required field for Outfit: ['name']")
    raw_id = metadata.get("outfit_id", metadata.get("id"))
    item_ids = metadata.get("item_ids", metadata.get("itemIds"))
    created_at = _optional_int(metadata.get("created_at", metadata.get("createdAt")))
    return Outfit(
        name=str(name),
        outfit_id=str(raw_id) if raw_id is not None else None,
        item_ids=_ensure_list(item_ids),
        notes=metadata.get("notes"),
        created_at=created_at if created_at is not None else _now_ms(),
    )


__all__ = ["Outfit", "outfit_from_raw"]
