"""User accounts with hashed passwords."""
from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from passlib.context import CryptContext

from logic.validation import InvalidRequestError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


class AuthenticationError(Exception):
    """Raised when credentials are missing or wrong."""


class UsernameTakenError(InvalidRequestError):
    """Raised when signing up with a username that already exists."""


@dataclass(frozen=True)
class User:
    id: str
    username: str
    password_hash: str

    def public_dict(self) -> dict:
        return {"id": self.id, "username": self.username}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


class SQLiteUserStore:
    """SQLite-backed user table keyed by a generated id with unique usernames."""

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
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    username TEXT NOT NULL UNIQUE,
                    password TEXT NOT NULL
                );
                """
            )

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(id=row["id"], username=row["username"], password_hash=row["password"])

    def get_user(self, user_id: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._row_to_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
            return self._row_to_user(row) if row else None

    def create_user(self, username: str, password: str) -> User:
        """Validate and store a new user; the password is hashed before it is written.

        Raises:
            InvalidRequestError: For a short username or password.
            UsernameTakenError: If the username already exists.
        """

        if len(username) < MIN_USERNAME_LENGTH:
            raise InvalidRequestError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidRequestError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.get_user_by_username(username):
            raise UsernameTakenError("Username already taken")

        user = User(id=str(uuid.uuid4()), username=username, password_hash=hash_password(password))
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO users (id, username, password) VALUES (?, ?, ?)",
                    (user.id, user.username, user.password_hash),
                )
        except sqlite3.IntegrityError as exc:
            raise UsernameTakenError("Username already taken") from exc
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid username or password")
        return user


__all__ = [
    "AuthenticationError",
    "SQLiteUserStore",
    "User",
    "UsernameTakenError",
    "hash_password",
    "verify_password",
]
