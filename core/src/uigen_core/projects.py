from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from uigen_core.db.projects import (
    ProjectRow,
    create_project,
    get_project,
    list_projects_for_user,
)


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    messages: list[Any]
    data: dict[str, Any]
    created_at: str
    updated_at: str


def project_from_row(row: ProjectRow) -> Project:
    return Project(
        id=row.project_id,
        name=row.name,
        messages=row.messages,
        data=row.data,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ProjectStore(Protocol):
    async def list_projects(self) -> list[Project]:
        """The user's projects, most recently updated first."""
        ...

    async def create(
        self,
        *,
        name: str,
        messages: list[Any],
        data: dict[str, Any],
    ) -> Project: ...


class SqliteProjectStore:
    """Projects owned by one signed-in user."""

    def __init__(self, db_path: Path, user_id: str) -> None:
        self._db_path = db_path
        self._user_id = user_id

    async def list_projects(self) -> list[Project]:
        rows = list_projects_for_user(self._db_path, user_id=self._user_id)
        return [project_from_row(r) for r in rows]

    async def create(
        self,
        *,
        name: str,
        messages: list[Any],
        data: dict[str, Any],
    ) -> Project:
        row = create_project(
            self._db_path,
            user_id=self._user_id,
            name=name,
            messages=messages,
            data=data,
        )
        return project_from_row(row)

    async def get(self, project_id: str) -> Project | None:
        row = get_project(self._db_path, project_id=project_id, user_id=self._user_id)
        if row is None:
            return None
        return project_from_row(row)
