from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from uigen_core.db.ids import new_id


@dataclass(frozen=True)
class ProjectRow:
    project_id: str
    user_id: str | None
    name: str
    messages: list[Any]
    data: dict[str, Any]
    created_at: str
    updated_at: str


def _loads_list(raw: str) -> list[Any]:
    try:
        v = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if isinstance(v, list):
        return v
    return []


def _loads_dict(raw: str) -> dict[str, Any]:
    try:
        v = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    if isinstance(v, dict):
        return v
    return {}


def _project_from_db_row(row: sqlite3.Row) -> ProjectRow:
    return ProjectRow(
        project_id=row["project_id"],
        user_id=row["user_id"],
        name=row["name"],
        messages=_loads_list(row["messages_json"]),
        data=_loads_dict(row["data_json"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


_SELECT_COLUMNS = """
SELECT project_id, user_id, name, messages_json, data_json, created_at, updated_at
FROM projects
""".strip()


def create_project(
    db_path: Path,
    *,
    user_id: str | None,
    name: str,
    messages: list[Any] | None = None,
    data: dict[str, Any] | None = None,
) -> ProjectRow:
    project_id = new_id()
    messages_json = json.dumps(messages or [], ensure_ascii=False)
    data_json = json.dumps(data or {}, ensure_ascii=False)

    with _connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO projects (project_id, user_id, name, messages_json, data_json)
            VALUES (?, ?, ?, ?, ?);
            """.strip(),
            (project_id, user_id, name, messages_json, data_json),
        )

        row = conn.execute(
            f"{_SELECT_COLUMNS} WHERE project_id = ?;",
            (project_id,),
        ).fetchone()

    if row is None:
        raise RuntimeError("Failed to read project after insert")

    return _project_from_db_row(row)


def get_project(db_path: Path, *, project_id: str, user_id: str) -> ProjectRow | None:
    with _connect(db_path) as conn:
        row = conn.execute(
            f"{_SELECT_COLUMNS} WHERE project_id = ? AND user_id = ?;",
            (project_id, user_id),
        ).fetchone()

    if row is None:
        return None
    return _project_from_db_row(row)


def list_projects_for_user(db_path: Path, *, user_id: str) -> list[ProjectRow]:
    """List a user's projects, most recently updated first.

    Ties (same millisecond) fall back to creation time and then insertion order,
    so the first row is always the newest project.
    """

    with _connect(db_path) as conn:
        rows = conn.execute(
            f"""
            {_SELECT_COLUMNS}
            WHERE user_id = ?
            ORDER BY updated_at DESC, created_at DESC, rowid DESC;
            """.strip(),
            (user_id,),
        ).fetchall()

    return [_project_from_db_row(r) for r in rows]
