"""Saved-outfit storage abstractions and SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from models.outfit import SavedOutfit, SavedOutfitItem
from tools.observability import instrument_tool


class OutfitNotFoundError(LookupError):
    """Raised when an outfit does not exist or belongs to someone else."""


class OutfitStore:
    """Persistence interface for saved outfits. Rows are immutable once created."""

    def create_outfit(
        self,
        user_id: str,
        name: str,
        mood: str,
        items: Sequence[SavedOutfitItem],
        explanation: str,
        style_vibe: Optional[str] = None,
        style_notes: Optional[str] = None,
        composite_image: Optional[str] = None,
    ) -> SavedOutfit:
        raise NotImplementedError

    def get_outfit(self, outfit_id: str) -> Optional[SavedOutfit]:
        raise NotImplementedError

    def list_outfits_for_user(self, user_id: str) -> List[SavedOutfit]:
        raise NotImplementedError

    def delete_outfit(self, outfit_id: str, user_id: str) -> bool:
        raise NotImplementedError


class SQLiteOutfitStore(OutfitStore):
    """Local SQLite-backed store for saved outfits."""

    def __init__(self, database_path: str | Path = "data/fitmuse.db") -> None:
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
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS saved_outfits (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    mood TEXT NOT NULL,
                    style_vibe TEXT,
                    items TEXT NOT NULL,
                    explanation TEXT NOT NULL,
                    style_notes TEXT,
                    composite_image TEXT,
                    created_at TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_saved_outfits_user
                    ON saved_outfits (user_id, created_at);
                """
            )

    @staticmethod
    def _serialise_items(items: Sequence[SavedOutfitItem]) -> str:
        return json.dumps([item.to_dict() for item in items])

    @staticmethod
    def _deserialise_items(raw: str) -> List[SavedOutfitItem]:
        entries: List[Dict[str, Any]] = json.loads(raw) if raw else []
        return [
            SavedOutfitItem(
                id=entry["id"],
                name=entry["name"],
                preview=entry["preview"],
                category=entry.get("category"),
                category_given="category" in entry,
            )
            for entry in entries
        ]

    def _row_to_outfit(self, row: sqlite3.Row) -> SavedOutfit:
        return SavedOutfit(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            mood=row["mood"],
            style_vibe=row["style_vibe"],
            items=self._deserialise_items(row["items"]),
            explanation=row["explanation"],
            style_notes=row["style_notes"],
            composite_image=row["composite_image"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    @instrument_tool("create_saved_outfit")
    def create_outfit(
        self,
        user_id: str,
        name: str,
        mood: str,
        items: Sequence[SavedOutfitItem],
        explanation: str,
        style_vibe: Optional[str] = None,
        style_notes: Optional[str] = None,
        composite_image: Optional[str] = None,
    ) -> SavedOutfit:
        outfit = SavedOutfit(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            mood=mood,
            style_vibe=style_vibe or None,
            items=list(items),
            explanation=explanation,
            style_notes=style_notes or None,
            composite_image=composite_image or None,
            created_at=datetime.now(timezone.utc),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO saved_outfits (
                    id, user_id, name, mood, style_vibe, items,
                    explanation, style_notes, composite_image, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    outfit.id,
                    outfit.user_id,
                    outfit.name,
                    outfit.mood,
                    outfit.style_vibe,
                    self._serialise_items(outfit.items),
                    outfit.explanation,
                    outfit.style_notes,
                    outfit.composite_image,
                    outfit.created_at.isoformat(timespec="microseconds"),
                ),
            )
        return outfit

    def get_outfit(self, outfit_id: str) -> Optional[SavedOutfit]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM saved_outfits WHERE id = ?", (outfit_id,)).fetchone()
            return self._row_to_outfit(row) if row else None

    @instrument_tool("list_saved_outfits")
    def list_outfits_for_user(self, user_id: str) -> List[SavedOutfit]:
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM saved_outfits WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                (user_id,),
            )
            return [self._row_to_outfit(row) for row in cursor.fetchall()]

    @instrument_tool("delete_saved_outfit")
    def delete_outfit(self, outfit_id: str, user_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM saved_outfits WHERE id = ? AND user_id = ?",
                (outfit_id, user_id),
            )
            return cursor.rowcount > 0


__all__ = ["OutfitStore", "SQLiteOutfitStore", "OutfitNotFoundError"]
