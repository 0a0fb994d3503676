from __future__ import annotations

import sqlite3
from pathlib import Path

from uigen_core.config import load_core_config, resolve_configured_paths
from uigen_core.db import resolve_db_path
from uigen_core.db.migrate import apply_migrations
from uigen_core.home import ensure_uigen_layout


def _table_names(db_path: Path) -> set[str]:
    with sqlite3.connect(db_path) as conn:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name ASC;"
        ).fetchall()
    return {r[0] for r in rows}


def _table_columns(db_path: Path, table: str) -> set[str]:
    with sqlite3.connect(db_path) as conn:
        rows = conn.execute(f"PRAGMA table_info({table});").fetchall()
    return {r[1] for r in rows}


def test_migrations_blank_to_latest(tmp_path: Path) -> None:
    paths = ensure_uigen_layout(tmp_path)
    config = load_core_config(paths)
    paths = resolve_configured_paths(paths, config)

    db_path = resolve_db_path(paths)

    assert apply_migrations(db_path) == ["0001_init"]
    assert apply_migrations(db_path) == []  # idempotent

    tables = _table_names(db_path)

    assert "schema_migrations" in tables
    assert "users" in tables
    assert "projects" in tables
    assert "anon_work" in tables

    project_cols = _table_columns(db_path, "projects")
    assert {"project_id", "user_id", "name", "messages_json", "data_json"} <= project_cols
    assert {"created_at", "updated_at"} <= project_cols
