"""Closet item data model and helpers."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import LIST_TAGS, normalize_category


def _now_ms() -> int:
    return int(time.time() * 1000)


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _clean_tags(values: Any) -> List[str]:
    """Strip and deduplicate tags while keeping their original spelling."""

    cleaned = []
    seen = set()
    for value in _ensure_list(values):
        tag = str(value).strip()
        if tag and tag not in seen:
            cleaned.append(tag)
            seen.add(tag)
    return cleaned


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class ClosetItem:
    """A garment in the user's closet.

    ``category`` is kept as the free text the user entered; use
    :attr:`normalized_category` for slot-based logic.
    """

    name: str
    item_id: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    favorite: bool = False
    hidden: bool = False
    hidden_until: Optional[int] = None
    created_at: int = field(default_factory=_now_ms)
    image_uri: Optional[str] = None
    thumb_uri: Optional[str] = None
    notes: Optional[str] = None
    worn_at: Optional[int] = None

    def __post_init__(self) -> None:
        self.tags = _clean_tags(self.tags)
        self.favorite = bool(self.favorite)
        self.hidden = bool(self.hidden)
        if self.category is not None:
            self.category = str(self.category)
            if not self.category.strip():
                self.category = None

    @property
    def normalized_category(self) -> Optional[str]:
        return normalize_category(self.category)

    @property
    def is_favorite(self) -> bool:
        """Favorites are flagged directly or through the favorites list tag."""

        return self.favorite or LIST_TAGS["FAVORITES"] in self.tags

    @property
    def search_text(self) -> str:
        """Lower-cased name and tags joined for keyword and color lookups."""

        return " ".join([self.name.lower(), *(tag.lower() for tag in self.tags)])


def _pick(metadata: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in metadata and metadata[key] is not None:
            return metadata[key]
    return None


def from_raw_metadata(metadata: Dict[str, Any]) -> ClosetItem:
    """Factory to build a :class:`ClosetItem` from loose storage or API records.

    Both snake_case and the camelCase keys written by the mobile client are
    accepted. ``hidden`` may arrive as ``0``/``1`` from SQLite rows.
    """

    name = metadata.get("name")
    if name is None or not str(name).strip():
        raise ValueError("Missing required field for ClosetItem: ['name']")

    raw_id = _pick(metadata, "item_id", "id")
    created_at = _optional_int(_pick(metadata, "created_at", "createdAt"))
    return ClosetItem(
        name=str(name),
        item_id=str(raw_id) if raw_id is not None else None,
        category=metadata.get("category"),
        tags=_ensure_list(metadata.get("tags")),
        favorite=bool(metadata.get("favorite") or False),
        hidden=bool(metadata.get("hidden") or False),
        hidden_until=_optional_int(_pick(metadata, "hidden_until", "hiddenUntil")),
        created_at=created_at if created_at is not None else _now_ms(),
        image_uri=_pick(metadata, "image_uri", "imageUri"),
        thumb_uri=_pick(metadata, "thumb_uri", "thumbUri"),
        notes=metadata.get("notes"),
        worn_at=_optional_int(_pick(metadata, "worn_at", "wornAt")),
    )


__all__ = ["ClosetItem", "from_raw_metadata"]
