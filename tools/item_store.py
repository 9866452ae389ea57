"""Closet item storage interface with in-memory and SQLite implementations."""
from __future__ import annotations

import itertools
import json
import logging
import sqlite3
import time
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from models.closet_item import ClosetItem, from_raw_metadata

LOGGER = logging.getLogger(__name__)

# Starter closet offered on first launch.
SAMPLE_ITEMS: List[Dict[str, object]] = [
    {"name": "White Tee", "category": "top", "tags": ["casual", "summer", "basic"]},
    {"name": "White Hoodie", "category": "top", "tags": ["casual", "winter", "cozy"]},
    {"name": "Light Blue Jeans", "category": "bottom", "tags": ["casual", "denim"]},
    {"name": "Black Trousers", "category": "bottom", "tags": ["formal", "work"]},
    {"name": "Air Force 1 GTX", "category": "shoes", "tags": ["casual", "sneakers", "waterproof"]},
]

_UPDATABLE_FIELDS = {
    "name",
    "category",
    "tags",
    "favorite",
    "hidden",
    "hidden_until",
    "image_uri",
    "thumb_uri",
    "notes",
    "worn_at",
}


class ItemStore:
    """Persistence interface for closet items.

    ``hidden`` and ``hidden_until`` are stored verbatim; visibility is decided
    by the caller at read time.
    """

    def create_item(self, item: ClosetItem) -> ClosetItem:
        raise NotImplementedError

    def get_item(self, item_id: str) -> Optional[ClosetItem]:
        raise NotImplementedError

    def list_items(self) -> List[ClosetItem]:
        raise NotImplementedError

    def update_item(self, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClosetItem]:
        raise NotImplementedError

    def delete_item(self, item_id: str) -> bool:
        raise NotImplementedError


class InMemoryItemStore(ItemStore):
    """Dictionary-backed store for local runs and tests."""

    def __init__(self, items: Optional[List[ClosetItem]] = None) -> None:
        self._items: Dict[str, ClosetItem] = {}
        self._ids = itertools.count(1)
        for item in items or []:
            self.create_item(item)

    def _next_id(self) -> str:
        candidate = str(next(self._ids))
        while candidate in self._items:
            candidate = str(next(self._ids))
        return candidate

    def create_item(self, item: ClosetItem) -> ClosetItem:
        item_id = item.item_id or self._next_id()
        if item_id in self._items:
            raise ValueError(f"Item '{item_id}' already exists")
        stored = replace(item, item_id=item_id)
        self._items[item_id] = stored
        LOGGER.info("Stored closet item", extra={"item_id": item_id})
        return stored

    def get_item(self, item_id: str) -> Optional[ClosetItem]:
        return self._items.get(str(item_id))

    def list_items(self) -> List[ClosetItem]:
        return sorted(self._items.values(), key=lambda item: item.created_at, reverse=True)

    def update_item(self, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClosetItem]:
        current = self._items.get(str(item_id))
        if current is None:
            return None
        unknown = set(updated_fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported fields for update: {sorted(unknown)}")
        updated = replace(current, **updated_fields)
        self._items[str(item_id)] = updated
        return updated

    def delete_item(self, item_id: str) -> bool:
        return self._items.pop(str(item_id), None) is not None


class SQLiteItemStore(ItemStore):
    """Local SQLite-backed store mirroring the mobile client's ``items`` table."""

    def __init__(self, database_path: str | Path = "data/closet.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS items (
                    item_id TEXT PRIMARY KEY NOT NULL,
                    name TEXT NOT NULL,
                    category TEXT,
                    tags TEXT,
                    favorite INTEGER,
                    hidden INTEGER,
                    hidden_until INTEGER,
                    created_at INTEGER,
                    image_uri TEXT,
                    thumb_uri TEXT,
                    notes TEXT,
                    worn_at INTEGER
                );
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_items_category ON items(category);")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_items_hidden ON items(hidden);")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_items_created_at ON items(created_at);")

    def _next_id(self, conn: sqlite3.Connection) -> str:
        row = conn.execute("SELECT COALESCE(MAX(CAST(item_id AS INTEGER)), 0) + 1 AS next_id FROM items").fetchone()
        return str(row["next_id"])

    def _write(self, conn: sqlite3.Connection, item: ClosetItem) -> None:
        conn.execute(
            """
            INSERT OR REPLACE INTO items (
                item_id, name, category, tags, favorite, hidden, hidden_until,
                created_at, image_uri, thumb_uri, notes, worn_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                item.item_id,
                item.name,
                item.category,
                json.dumps(item.tags),
                int(item.favorite),
                int(item.hidden),
                item.hidden_until,
                item.created_at,
                item.image_uri,
                item.thumb_uri,
                item.notes,
                item.worn_at,
            ),
        )

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> ClosetItem:
        return ClosetItem(
            item_id=row["item_id"],
            name=row["name"],
            category=row["category"],
            tags=json.loads(row["tags"]) if row["tags"] else [],
            favorite=bool(row["favorite"]),
            hidden=bool(row["hidden"]),
            hidden_until=row["hidden_until"],
            created_at=row["created_at"],
            image_uri=row["image_uri"],
            thumb_uri=row["thumb_uri"],
            notes=row["notes"],
            worn_at=row["worn_at"],
        )

    def create_item(self, item: ClosetItem) -> ClosetItem:
        with self._connect() as conn:
            item_id = item.item_id or self._next_id(conn)
            exists = conn.execute("SELECT 1 FROM items WHERE item_id = ?", (item_id,)).fetchone()
            if exists:
                raise ValueError(f"Item '{item_id}' already exists")
            stored = replace(item, item_id=item_id)
            self._write(conn, stored)
        LOGGER.info("Stored closet item", extra={"item_id": item_id})
        return stored

    def get_item(self, item_id: str) -> Optional[ClosetItem]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM items WHERE item_id = ?", (str(item_id),)).fetchone()
            return self._row_to_item(row) if row else None

    def list_items(self) -> List[ClosetItem]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM items ORDER BY created_at DESC").fetchall()
            return [self._row_to_item(row) for row in rows]

    def update_item(self, item_id: str, updated_fields: Dict[str, object]) -> Optional[ClosetItem]:
        current = self.get_item(item_id)
        if current is None:
            return None
        unknown = set(updated_fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported fields for update: {sorted(unknown)}")
        updated = replace(current, **updated_fields)
        with self._connect() as conn:
            self._write(conn, updated)
        return updated

    def delete_item(self, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM items WHERE item_id = ?", (str(item_id),))
            return cursor.rowcount > 0

    def unhide_expired(self, now_ms: Optional[int] = None) -> int:
        """Clear ``hidden_until`` on items whose timed hide has lapsed."""

        now = now_ms if now_ms is not None else int(time.time() * 1000)
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE items SET hidden_until = NULL WHERE hidden_until IS NOT NULL AND hidden_until <= ?",
                (now,),
            )
        if cursor.rowcount:
            LOGGER.info("Cleared %s expired timed hides", cursor.rowcount)
        return cursor.rowcount


def seed_sample_items(store: ItemStore) -> List[ClosetItem]:
    """Populate an empty store with the starter closet; no-op otherwise."""

    if store.list_items():
        return []
    created = [store.create_item(from_raw_metadata(raw)) for raw in SAMPLE_ITEMS]
    LOGGER.info("Seeded %s sample items", len(created))
    return created


def load_items_from_json(path: str | Path) -> List[ClosetItem]:
    """Read a JSON array of item records exported by the mobile client."""

    raw = json.loads(Path(path).read_text())
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON array of items in {path}")
    return [from_raw_metadata(entry) for entry in raw]


__all__ = [
    "SAMPLE_ITEMS",
    "ItemStore",
    "InMemoryItemStore",
    "SQLiteItemStore",
    "seed_sample_items",
    "load_items_from_json",
]
