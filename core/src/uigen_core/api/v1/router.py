from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from uigen_core import __version__
from uigen_core.api.models import ApiResponse, ok
from uigen_core.api.v1.anon_work import router as anon_work_router
from uigen_core.api.v1.auth import router as auth_router
from uigen_core.api.v1.projects import router as projects_router
from uigen_core.api.v1.prompts import router as prompts_router
from uigen_core.api.v1.tool_invocations import router as tool_invocations_router

router = APIRouter(prefix="/v1", tags=["v1"])

router.include_router(auth_router)
router.include_router(anon_work_router)
router.include_router(projects_router)
router.include_router(tool_invocations_router)
router.include_router(prompts_router)


class SystemInfo(BaseModel):
    version: str


@router.get("/ping", response_model=ApiResponse[dict[str, bool]])
async def ping() -> ApiResponse[dict[str, bool]]:
    return ok({"pong": True})


@router.get("/system/info", response_model=ApiResponse[SystemInfo])
async def system_info() -> ApiResponse[SystemInfo]:
    # No secrets and no config introspection here.
    return ok(SystemInfo(version=__version__))
