"""Saved outfit storage with in-memory and SQLite implementations."""
from __future__ import annotations

import itertools
import json
import logging
import sqlite3
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional

from models.outfit import Outfit

LOGGER = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"name", "item_ids", "notes"}


class OutfitStore:
    """Persistence interface for saved outfits, newest first."""

    def create_outfit(self, outfit: Outfit) -> Outfit:
        raise NotImplementedError

    def get_outfit(self, outfit_id: str) -> Optional[Outfit]:
        raise NotImplementedError

    def list_outfits(self) -> List[Outfit]:
        raise NotImplementedError

    def update_outfit(self, outfit_id: str, updated_fields: Dict[str, object]) -> Optional[Outfit]:
        raise NotImplementedError

    def delete_outfit(self, outfit_id: str) -> bool:
        raise NotImplementedError


def _check_fields(updated_fields: Dict[str, object]) -> None:
    unknown = set(updated_fields) - _UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unsupported fields for update: {sorted(unknown)}")


class InMemoryOutfitStore(OutfitStore):
    def __init__(self, outfits: Optional[List[Outfit]] = None) -> None:
        self._outfits: Dict[str, Outfit] = {}
        self._ids = itertools.count(1)
        for outfit in outfits or []:
            self.create_outfit(outfit)

    def _next_id(self) -> str:
        candidate = str(next(self._ids))
        while candidate in self._outfits:
            candidate = str(next(self._ids))
        return candidate

    def create_outfit(self, outfit: Outfit) -> Outfit:
        outfit_id = outfit.outfit_id or self._next_id()
        if outfit_id in self._outfits:
            raise ValueError(f"Outfit '{outfit_id}' already exists")
        stored = replace(outfit, outfit_id=outfit_id)
        self._outfits[outfit_id] = stored
        LOGGER.info("Saved outfit", extra={"outfit_id": outfit_id})
        return stored

    def get_outfit(self, outfit_id: str) -> Optional[Outfit]:
        return self._outfits.get(str(outfit_id))

    def list_outfits(self) -> List[Outfit]:
        return sorted(self._outfits.values(), key=lambda outfit: outfit.created_at, reverse=True)

    def update_outfit(self, outfit_id: str, updated_fields: Dict[str, object]) -> Optional[Outfit]:
        current = self._outfits.get(str(outfit_id))
        if current is None:
            return None
        _check_fields(updated_fields)
        updated = replace(current, **updated_fields)
        self._outfits[str(outfit_id)] = updated
        return updated

    def delete_outfit(self, outfit_id: str) -> bool:
        return self._outfits.pop(str(outfit_id), None) is not None


class SQLiteOutfitStore(OutfitStore):
    """``outfits`` table living next to ``items`` in the closet database."""

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
                CREATE TABLE IF NOT EXISTS outfits (
                    outfit_id TEXT PRIMARY KEY NOT NULL,
                    name TEXT NOT NULL,
                    item_ids TEXT,
                    notes TEXT,
                    created_at INTEGER
                );
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_outfits_created_at ON outfits(created_at);")

    def _next_id(self, conn: sqlite3.Connection) -> str:
        row = conn.execute(
            "SELECT COALESCE(MAX(CAST(outfit_id AS INTEGER)), 0) + 1 AS next_id FROM outfits"
        ).fetchone()
        return str(row["next_id"])

    def _write(self, conn: sqlite3.Connection, outfit: Outfit) -> None:
        conn.execute(
            "INSERT OR REPLACE INTO outfits (outfit_id, name, item_ids, notes, created_at) VALUES (?, ?, ?, ?, ?)",
            (outfit.outfit_id, outfit.name, json.dumps(outfit.item_ids), outfit.notes, outfit.created_at),
        )

    @staticmethod
    def _row_to_outfit(row: sqlite3.Row) -> Outfit:
        return Outfit(
            outfit_id=row["outfit_id"],
            name=row["name"],
            item_ids=json.loads(row["item_ids"]) if row["item_ids"] else [],
            notes=row["notes"],
            created_at=row["created_at"],
        )

    def create_outfit(self, outfit: Outfit) -> Outfit:
        with self._connect() as conn:
            outfit_id = outfit.outfit_id or self._next_id(conn)
            exists = conn.execute("SELECT 1 FROM outfits WHERE outfit_id = ?", (outfit_id,)).fetchone()
            if exists:
                raise ValueError(f"Outfit '{outfit_id}' already exists")
            stored = replace(outfit, outfit_id=outfit_id)
            self._write(conn, stored)
        LOGGER.info("Saved outfit", extra={"outfit_id": outfit_id})
        return stored

    def get_outfit(self, outfit_id: str) -> Optional[Outfit]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM outfits WHERE outfit_id = ?", (str(outfit_id),)).fetchone()
            return self._row_to_outfit(row) if row else None

    def list_outfits(self) -> List[Outfit]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM outfits ORDER BY created_at DESC").fetchall()
            return [self._row_to_outfit(row) for row in rows]

    def update_outfit(self, outfit_id: str, updated_fields: Dict[str, object]) -> Optional[Outfit]:
        current = self.get_outfit(outfit_id)
        if current is None:
            return None
        _check_fields(updated_fields)
        updated = replace(current, **updated_fields)
        with self._connect() as conn:
            self._write(conn, updated)
        return updated

    def delete_outfit(self, outfit_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM outfits WHERE outfit_id = ?", (str(outfit_id),))
            return cursor.rowcount > 0


__all__ = ["OutfitStore", "InMemoryOutfitStore", "SQLiteOutfitStore"]
