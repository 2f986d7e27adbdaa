"""Login session stores and a manager that issues and resolves session tokens."""
from __future__ import annotations

import json
import re
import secrets
import sqlite3
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


def is_well_formed_token(token: str | None) -> bool:
    """True for tokens shaped like ``secrets.token_urlsafe`` output."""

    return bool(token) and _TOKEN_PATTERN.fullmatch(token) is not None


@dataclass
class LoginSession:
    """One authenticated browser session."""

    token: str
    user_id: str
    created_at: float = field(default_factory=lambda: time.time())
    expires_at: float = 0.0

    def is_expired(self, now: float | None = None) -> bool:
        return (now if now is not None else time.time()) >= self.expires_at


class SessionStore:
    """Interface for login session persistence."""

    def create_session(self, user_id: str, ttl_seconds: int) -> LoginSession:
        raise NotImplementedError

    def get_session(self, token: str) -> Optional[LoginSession]:
        raise NotImplementedError

    def delete_session(self, token: str) -> None:
        raise NotImplementedError

    def purge_expired(self, now: float | None = None) -> int:
        raise NotImplementedError


class JSONSessionStore(SessionStore):
    """JSON-file-backed SessionStore suitable for local runs."""

    def __init__(self, base_dir: str = "data/sessions") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, token: str) -> Path:
        # Tokens name files, so only url-safe tokens ever reach the filesystem.
        if not is_well_formed_token(token):
            raise ValueError("Malformed session token")
        return self.base_dir / f"{token}.json"

    def create_session(self, user_id: str, ttl_seconds: int) -> LoginSession:
        now = time.time()
        session = LoginSession(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + ttl_seconds,
        )
        self._path(session.token).write_text(json.dumps(session.__dict__, indent=2))
        return session

    def get_session(self, token: str) -> Optional[LoginSession]:
        if not is_well_formed_token(token):
            return None
        path = self._path(token)
        if not path.exists():
            return None
        payload: Dict[str, Any] = json.loads(path.read_text())
        return LoginSession(**payload)

    def delete_session(self, token: str) -> None:
        if not is_well_formed_token(token):
            return
        path = self._path(token)
        if path.exists():
            path.unlink()

    def purge_expired(self, now: float | None = None) -> int:
        removed = 0
        for path in self.base_dir.glob("*.json"):
            session = LoginSession(**json.loads(path.read_text()))
            if session.is_expired(now):
                path.unlink()
                removed += 1
        return removed


class SQLiteSessionStore(SessionStore):
    """SQLite-backed session store sharing the application database."""

    def __init__(self, db_path: str | Path = "data/fitmuse.db") -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS login_sessions (
                    token TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    expires_at REAL NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_login_sessions_user ON login_sessions (user_id);
                """
            )

    def create_session(self, user_id: str, ttl_seconds: int) -> LoginSession:
        now = time.time()
        session = LoginSession(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + ttl_seconds,
        )
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO login_sessions(token, user_id, created_at, expires_at) VALUES (?, ?, ?, ?)",
                (session.token, session.user_id, session.created_at, session.expires_at),
            )
        return session

    def get_session(self, token: str) -> Optional[LoginSession]:
        if not token:
            return None
        with self._connect() as conn:
            row = conn.execute(
                "SELECT token, user_id, created_at, expires_at FROM login_sessions WHERE token = ?",
                (token,),
            ).fetchone()
        if row is None:
            return None
        return LoginSession(
            token=row["token"],
            user_id=row["user_id"],
            created_at=row["created_at"],
            expires_at=row["expires_at"],
        )

    def delete_session(self, token: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM login_sessions WHERE token = ?", (token,))

    def purge_expired(self, now: float | None = None) -> int:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM login_sessions WHERE expires_at <= ?",
                (now if now is not None else time.time(),),
            )
            return cursor.rowcount


class SessionManager:
    """Coordinates login session creation, lookup and logout."""

    def __init__(self, store: SessionStore, ttl_seconds: int = 7 * 24 * 3600) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds

    def start_session(self, user_id: str) -> LoginSession:
        return self.store.create_session(user_id=user_id, ttl_seconds=self.ttl_seconds)

    def resolve_user_id(self, token: str | None) -> Optional[str]:
        """Return the user id for a live token; expired sessions are removed on sight."""

        if not token:
            return None
        session = self.store.get_session(token)
        if session is None:
            return None
        if session.is_expired():
            self.store.delete_session(token)
            return None
        return session.user_id

    def end_session(self, token: str | None) -> None:
        if token:
            self.store.delete_session(token)

    def purge_expired(self) -> int:
        return self.store.purge_expired()


__all__ = [
    "LoginSession",
    "is_well_formed_token",
    "SessionManager",
    "SessionStore",
    "JSONSessionStore",
    "SQLiteSessionStore",
]
