"""Moodboard and style-vibe lookup tables backed by SQLite."""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional

from models.reference_data import SEED_MOODBOARDS, SEED_STYLE_VIBES, Moodboard, StyleVibe
from tools.observability import instrument_tool

logger = logging.getLogger(__name__)


class ReferenceStore:
    """Read-mostly interface for the styling reference tables."""

    def get_moodboard(self, name: str) -> Optional[Moodboard]:
        raise NotImplementedError

    def list_moodboards(self) -> List[Moodboard]:
        raise NotImplementedError

    def upsert_moodboard(self, moodboard: Moodboard) -> Moodboard:
        raise NotImplementedError

    def get_style_vibe(self, name: str) -> Optional[StyleVibe]:
        raise NotImplementedError

    def list_style_vibes(self) -> List[StyleVibe]:
        raise NotImplementedError

    def upsert_style_vibe(self, style_vibe: StyleVibe) -> StyleVibe:
        raise NotImplementedError


class SQLiteReferenceStore(ReferenceStore):
    """Local SQLite-backed store; names are unique and matched case-insensitively."""

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
                CREATE TABLE IF NOT EXISTS moodboards (
                    name TEXT PRIMARY KEY COLLATE NOCASE,
                    color_palette TEXT NOT NULL,
                    textures TEXT NOT NULL,
                    silhouettes TEXT NOT NULL,
                    typical_pieces TEXT NOT NULL,
                    styling_logic TEXT NOT NULL,
                    example_outfit TEXT NOT NULL,
                    position INTEGER NOT NULL DEFAULT 0
                );
                CREATE TABLE IF NOT EXISTS style_vibes (
                    name TEXT PRIMARY KEY COLLATE NOCASE,
                    color_tendencies TEXT NOT NULL,
                    textures TEXT NOT NULL,
                    silhouettes TEXT NOT NULL,
                    typical_pieces TEXT NOT NULL,
                    styling_rules TEXT NOT NULL,
                    example_outfit TEXT NOT NULL,
                    position INTEGER NOT NULL DEFAULT 0
                );
                """
            )

    @staticmethod
    def _serialise_list(values: Optional[Iterable[str]]) -> str:
        return json.dumps(list(values or []))

    @staticmethod
    def _deserialise_list(raw: str) -> List[str]:
        return json.loads(raw) if raw else []

    @staticmethod
    def _next_position(conn: sqlite3.Connection, table: str, name: str) -> int:
        row = conn.execute(f"SELECT position FROM {table} WHERE name = ?", (name,)).fetchone()
        if row:
            return int(row["position"])
        row = conn.execute(f"SELECT COALESCE(MAX(position), -1) + 1 AS next FROM {table}").fetchone()
        return int(row["next"])

    def _row_to_moodboard(self, row: sqlite3.Row) -> Moodboard:
        return Moodboard(
            name=row["name"],
            color_palette=self._deserialise_list(row["color_palette"]),
            textures=self._deserialise_list(row["textures"]),
            silhouettes=self._deserialise_list(row["silhouettes"]),
            typical_pieces=self._deserialise_list(row["typical_pieces"]),
            styling_logic=self._deserialise_list(row["styling_logic"]),
            example_outfit=self._deserialise_list(row["example_outfit"]),
        )

    def _row_to_style_vibe(self, row: sqlite3.Row) -> StyleVibe:
        return StyleVibe(
            name=row["name"],
            color_tendencies=self._deserialise_list(row["color_tendencies"]),
            textures=self._deserialise_list(row["textures"]),
            silhouettes=self._deserialise_list(row["silhouettes"]),
            typical_pieces=self._deserialise_list(row["typical_pieces"]),
            styling_rules=self._deserialise_list(row["styling_rules"]),
            example_outfit=self._deserialise_list(row["example_outfit"]),
        )

    @instrument_tool("get_moodboard")
    def get_moodboard(self, name: str) -> Optional[Moodboard]:
        if not name or not name.strip():
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM moodboards WHERE name = ?", (name.strip(),)).fetchone()
            return self._row_to_moodboard(row) if row else None

    def list_moodboards(self) -> List[Moodboard]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM moodboards ORDER BY position, name").fetchall()
            return [self._row_to_moodboard(row) for row in rows]

    def upsert_moodboard(self, moodboard: Moodboard) -> Moodboard:
        with self._connect() as conn:
            position = self._next_position(conn, "moodboards", moodboard.name)
            conn.execute(
                """
                INSERT OR REPLACE INTO moodboards (
                    name, color_palette, textures, silhouettes, typical_pieces,
                    styling_logic, example_outfit, position
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    moodboard.name,
                    self._serialise_list(moodboard.color_palette),
                    self._serialise_list(moodboard.textures),
                    self._serialise_list(moodboard.silhouettes),
                    self._serialise_list(moodboard.typical_pieces),
                    self._serialise_list(moodboard.styling_logic),
                    self._serialise_list(moodboard.example_outfit),
                    position,
                ),
            )
        return moodboard

    @instrument_tool("get_style_vibe")
    def get_style_vibe(self, name: str) -> Optional[StyleVibe]:
        if not name or not name.strip():
            return None
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM style_vibes WHERE name = ?", (name.strip(),)).fetchone()
            return self._row_to_style_vibe(row) if row else None

    def list_style_vibes(self) -> List[StyleVibe]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM style_vibes ORDER BY position, name").fetchall()
            return [self._row_to_style_vibe(row) for row in rows]

    def upsert_style_vibe(self, style_vibe: StyleVibe) -> StyleVibe:
        with self._connect() as conn:
            position = self._next_position(conn, "style_vibes", style_vibe.name)
            conn.execute(
                """
                INSERT OR REPLACE INTO style_vibes (
                    name, color_tendencies, textures, silhouettes, typical_pieces,
                    styling_rules, example_outfit, position
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    style_vibe.name,
                    self._serialise_list(style_vibe.color_tendencies),
                    self._serialise_list(style_vibe.textures),
                    self._serialise_list(style_vibe.silhouettes),
                    self._serialise_list(style_vibe.typical_pieces),
                    self._serialise_list(style_vibe.styling_rules),
                    self._serialise_list(style_vibe.example_outfit),
                    position,
                ),
            )
        return style_vibe


def seed_reference_data(store: ReferenceStore) -> dict:
    """Upsert the bundled moodboards and style vibes; safe to run repeatedly."""

    seeded = {"moodboards": 0, "style_vibes": 0, "failed": []}
    for moodboard in SEED_MOODBOARDS:
        try:
            store.upsert_moodboard(moodboard)
            seeded["moodboards"] += 1
        except sqlite3.Error as exc:
            logger.error("Failed to seed moodboard", extra={"moodboard": moodboard.name, "error": str(exc)})
            seeded["failed"].append(moodboard.name)
    for style_vibe in SEED_STYLE_VIBES:
        try:
            store.upsert_style_vibe(style_vibe)
            seeded["style_vibes"] += 1
        except sqlite3.Error as exc:
            logger.error("Failed to seed style vibe", extra={"style_vibe": style_vibe.name, "error": str(exc)})
            seeded["failed"].append(style_vibe.name)
    logger.info(
        "Reference data seeded",
        extra={"moodboards": seeded["moodboards"], "style_vibes": seeded["style_vibes"]},
    )
    return seeded


__all__ = ["ReferenceStore", "SQLiteReferenceStore", "seed_reference_data"]
