from __future__ import annotations

from pathlib import Path

from uigen_core.home import UIGenPaths

DEFAULT_DB_FILENAME = "core.sqlite3"


def resolve_db_path(paths: UIGenPaths) -> Path:
    """Resolve the Core SQLite database path (users, projects, anonymous work)."""

    return paths.db_dir / DEFAULT_DB_FILENAME
