from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class AnonWorkRow:
    anon_id: str
    messages: list[Any]
    file_system_data: dict[str, Any]
    updated_at: str


def _connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _anon_work_from_db_row(row: sqlite3.Row) -> AnonWorkRow:
    messages = json.loads(row["messages_json"])
    file_system_data = json.loads(row["file_system_json"])
    return AnonWorkRow(
        anon_id=row["anon_id"],
        messages=messages if isinstance(messages, list) else [],
        file_system_data=file_system_data if isinstance(file_system_data, dict) else {},
        updated_at=row["updated_at"],
    )


def upsert_anon_work(
    db_path: Path,
    *,
    anon_id: str,
    messages: list[Any],
    file_system_data: dict[str, Any],
) -> None:
    """Replace the single pending record for this visitor."""

    with _connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO anon_work (anon_id, messages_json, file_system_json)
            VALUES (?, ?, ?)
            ON CONFLICT(anon_id) DO UPDATE SET
                messages_json = excluded.messages_json,
                file_system_json = excluded.file_system_json,
                updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
            """.strip(),
            (
                anon_id,
                json.dumps(messages, ensure_ascii=False),
                json.dumps(file_system_data, ensure_ascii=False),
            ),
        )


def get_anon_work(db_path: Path, *, anon_id: str) -> AnonWorkRow | None:
    with _connect(db_path) as conn:
        row = conn.execute(
            """
            SELECT anon_id, messages_json, file_system_json, updated_at
            FROM anon_work
            WHERE anon_id = ?;
            """.strip(),
            (anon_id,),
        ).fetchone()

    if row is None:
        return None
    return _anon_work_from_db_row(row)


def delete_anon_work(db_path: Path, *, anon_id: str) -> bool:
    with _connect(db_path) as conn:
        cur = conn.execute("DELETE FROM anon_work WHERE anon_id = ?;", (anon_id,))
    return cur.rowcount > 0


def take_nonempty_anon_work(db_path: Path, *, anon_id: str) -> AnonWorkRow | None:
    """Read the visitor's record and delete it only if it holds messages.

    Runs in one IMMEDIATE transaction so two concurrent sign-ins cannot both
    consume the same record.
    """

    conn = _connect(db_path)
    try:
        conn.execute("BEGIN IMMEDIATE;")
        row = conn.execute(
            """
            SELECT anon_id, messages_json, file_system_json, updated_at
            FROM anon_work
            WHERE anon_id = ?;
            """.strip(),
            (anon_id,),
        ).fetchone()

        work = _anon_work_from_db_row(row) if row is not None else None
        if work is None or not work.messages:
            conn.execute("COMMIT;")
            return None

        conn.execute("DELETE FROM anon_work WHERE anon_id = ?;", (anon_id,))
        conn.execute("COMMIT;")
        return work
    except Exception:
        if conn.in_transaction:
            conn.rollback()
        raise
    finally:
        conn.close()
