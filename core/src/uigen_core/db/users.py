from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path

from uigen_core.db.ids import new_id


@dataclass(frozen=True)
class UserRow:
    user_id: str
    email: str
    password_hash: str
    created_at: str
    updated_at: str


class EmailAlreadyRegisteredError(Exception):
    pass


def _connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def _user_from_db_row(row: sqlite3.Row) -> UserRow:
    return UserRow(
        user_id=row["user_id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def create_user(db_path: Path, *, email: str, password_hash: str) -> UserRow:
    user_id = new_id()

    with _connect(db_path) as conn:
        try:
            conn.execute(
                "INSERT INTO users (user_id, email, password_hash) VALUES (?, ?, ?);",
                (user_id, email, password_hash),
            )
        except sqlite3.IntegrityError as exc:
            raise EmailAlreadyRegisteredError(email) from exc

        row = conn.execute(
            """
            SELECT user_id, email, password_hash, created_at, updated_at
            FROM users
            WHERE user_id = ?;
            """.strip(),
            (user_id,),
        ).fetchone()

    if row is None:
        raise RuntimeError("Failed to read user after insert")

    return _user_from_db_row(row)


def get_user_by_email(db_path: Path, *, email: str) -> UserRow | None:
    with _connect(db_path) as conn:
        row = conn.execute(
            """
            SELECT user_id, email, password_hash, created_at, updated_at
            FROM users
            WHERE email = ?;
            """.strip(),
            (email,),
        ).fetchone()

    if row is None:
        return None
    return _user_from_db_row(row)


def get_user(db_path: Path, *, user_id: str) -> UserRow | None:
    with _connect(db_path) as conn:
        row = conn.execute(
            """
            SELECT user_id, email, password_hash, created_at, updated_at
            FROM users
            WHERE user_id = ?;
            """.strip(),
            (user_id,),
        ).fetchone()

    if row is None:
        return None
    return _user_from_db_row(row)
