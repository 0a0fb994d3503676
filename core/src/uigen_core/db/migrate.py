from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from uigen_core.db.migrations import MIGRATIONS

logger = logging.getLogger(__name__)


def apply_migrations(db_path: Path) -> list[str]:
    """Bring a SQLite DB up to the latest schema; returns the names newly applied.

    Idempotent. WAL is enabled so page reads are not blocked while a sign-in
    holds the write lock to consume anonymous work.
    """

    db_path.parent.mkdir(parents=True, exist_ok=True)

    applied_now: list[str] = []
    with sqlite3.connect(db_path) as conn:
        conn.execute("PRAGMA journal_mode = WAL;")
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations ("
            " name TEXT PRIMARY KEY,"
            " applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"
            ");"
        )

        done = {row[0] for row in conn.execute("SELECT name FROM schema_migrations;")}

        for name, sql in MIGRATIONS:
            if name in done:
                continue
            conn.executescript(sql)
            conn.execute("INSERT INTO schema_migrations (name) VALUES (?);", (name,))
            applied_now.append(name)

    if applied_now:
        logger.info("Applied migrations to %s: %s", db_path, ", ".join(applied_now))
    return applied_now
