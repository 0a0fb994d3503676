from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from uigen_core.api.deps import get_db_path
from uigen_core.api.models import ApiResponse, ok
from uigen_core.auth import SessionPayload, require_session
from uigen_core.projects import Project, SqliteProjectStore

router = APIRouter(tags=["projects"])


class ProjectOut(BaseModel):
    id: str
    name: str
    messages: list[Any] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: str


class ProjectSummary(BaseModel):
    id: str
    name: str
    created_at: str
    updated_at: str


class ProjectCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    messages: list[Any] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)


class ProjectListResponse(BaseModel):
    items: list[ProjectSummary]
    total: int


def _to_project(project: Project) -> ProjectOut:
    return ProjectOut(
        id=project.id,
        name=project.name,
        messages=project.messages,
        data=project.data,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def _store(request: Request, session: SessionPayload) -> SqliteProjectStore:
    return SqliteProjectStore(get_db_path(request), session.user_id)


@router.get("/projects", response_model=ApiResponse[ProjectListResponse])
async def projects_list(
    request: Request,
    session: SessionPayload = Depends(require_session),  # noqa: B008
) -> ApiResponse[ProjectListResponse]:
    projects = await _store(request, session).list_projects()
    items = [
        ProjectSummary(
            id=p.id,
            name=p.name,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )
        for p in projects
    ]
    return ok(ProjectListResponse(items=items, total=len(items)))


@router.post("/projects", response_model=ApiResponse[ProjectOut])
async def projects_create(
    request: Request,
    payload: ProjectCreateRequest,
    session: SessionPayload = Depends(require_session),  # noqa: B008
) -> ApiResponse[ProjectOut]:
    project = await _store(request, session).create(
        name=payload.name,
        messages=payload.messages,
        data=payload.data,
    )
    return ok(_to_project(project))


@router.get("/projects/{project_id}", response_model=ApiResponse[ProjectOut])
async def projects_get(
    request: Request,
    project_id: str,
    session: SessionPayload = Depends(require_session),  # noqa: B008
) -> ApiResponse[ProjectOut]:
    project = await _store(request, session).get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return ok(_to_project(project))
