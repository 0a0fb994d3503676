from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field

from uigen_core.anon_work import SqliteAnonWorkStore, has_content
from uigen_core.api.deps import ensure_anon_id, get_db_path
from uigen_core.api.models import ApiResponse, ok
from uigen_core.auth import ANON_COOKIE

router = APIRouter(tags=["anon-work"])


class AnonWorkPayload(BaseModel):
    messages: list[Any] = Field(default_factory=list)
    file_system_data: dict[str, Any] = Field(default_factory=dict)


class AnonWorkSaved(BaseModel):
    stored: bool


@router.get("/anon-work", response_model=ApiResponse[AnonWorkPayload | None])
async def anon_work_get(request: Request) -> ApiResponse[AnonWorkPayload | None]:
    anon_id = request.cookies.get(ANON_COOKIE)
    if not anon_id:
        return ok(None)

    work = await SqliteAnonWorkStore(get_db_path(request), anon_id).get()
    if work is None:
        return ok(None)
    return ok(AnonWorkPayload(messages=work.messages, file_system_data=work.file_system_data))


@router.put("/anon-work", response_model=ApiResponse[AnonWorkSaved])
async def anon_work_put(
    request: Request,
    response: Response,
    payload: AnonWorkPayload,
) -> ApiResponse[AnonWorkSaved]:
    """Remember a visitor's pre-sign-in work (ignored when there is nothing in it)."""

    if not has_content(payload.messages, payload.file_system_data):
        return ok(AnonWorkSaved(stored=False))

    anon_id = ensure_anon_id(request, response)
    await SqliteAnonWorkStore(get_db_path(request), anon_id).save(
        payload.messages, payload.file_system_data
    )
    return ok(AnonWorkSaved(stored=True))


@router.delete("/anon-work", response_model=ApiResponse[dict[str, bool]])
async def anon_work_delete(request: Request) -> ApiResponse[dict[str, bool]]:
    anon_id = request.cookies.get(ANON_COOKIE)
    if anon_id:
        await SqliteAnonWorkStore(get_db_path(request), anon_id).clear()
    return ok({"cleared": True})
