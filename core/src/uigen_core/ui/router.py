from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from uigen_core.api.deps import build_auth_gateway, get_db_path
from uigen_core.auth import delete_session, get_session
from uigen_core.projects import SqliteProjectStore
from uigen_core.tool_invocation import describe_tool_invocation

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/ui/sign-in"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/ui", tags=["ui"])

# Mounted last by the app: `/{project_id}` would otherwise shadow other routes.
project_router = APIRouter(tags=["ui"])


def _auth_page(
    request: Request,
    *,
    mode: str,
    email: str = "",
    error: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    title = "Sign in" if mode == "sign-in" else "Sign up"
    return templates.TemplateResponse(
        request,
        "auth.html",
        {
            "title": f"{title} • UIGen",
            "heading": title,
            "mode": mode,
            "email": email,
            "error": error,
        },
        status_code=status_code,
    )


async def _auth_form_post(
    request: Request, *, email: str, password: str, sign_up: bool
) -> Response:
    # The redirect target is only known once reconciliation navigates.
    resp = RedirectResponse(url=SIGN_IN_PATH, status_code=303)

    def navigate(target: str) -> None:
        resp.headers["location"] = target

    gateway = build_auth_gateway(request, resp, navigate)
    if sign_up:
        result = await gateway.sign_up(email, password)
    else:
        result = await gateway.sign_in(email, password)

    if not result.success:
        return _auth_page(
            request,
            mode="sign-up" if sign_up else "sign-in",
            email=email,
            error=result.error,
            status_code=400 if sign_up else 401,
        )
    return resp


@router.get("/sign-in", response_class=HTMLResponse)
async def ui_sign_in(request: Request) -> HTMLResponse:
    return _auth_page(request, mode="sign-in")


@router.post("/sign-in", response_model=None)
async def ui_sign_in_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
) -> Response:
    return await _auth_form_post(request, email=email, password=password, sign_up=False)


@router.get("/sign-up", response_class=HTMLResponse)
async def ui_sign_up(request: Request) -> HTMLResponse:
    return _auth_page(request, mode="sign-up")


@router.post("/sign-up", response_model=None)
async def ui_sign_up_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
) -> Response:
    return await _auth_form_post(request, email=email, password=password, sign_up=True)


@router.post("/sign-out")
async def ui_sign_out() -> RedirectResponse:
    resp = RedirectResponse(url=SIGN_IN_PATH, status_code=303)
    delete_session(resp)
    return resp


def _message_view(message: Any) -> dict[str, Any]:
    if not isinstance(message, dict):
        return {"role": "unknown", "content": str(message), "tools": []}

    tools = []
    for call in message.get("toolInvocations") or []:
        if not isinstance(call, dict):
            continue
        try:
            tools.append(
                describe_tool_invocation(
                    call.get("toolName", ""),
                    call.get("args") or {},
                    call.get("state", "call"),
                    call.get("result"),
                )
            )
        except json.JSONDecodeError:
            logger.warning("Skipping tool call with malformed args: %s", call.get("toolName"))
    content = message.get("content")
    return {
        "role": message.get("role", "unknown"),
        "content": content if isinstance(content, str) else "",
        "tools": tools,
    }


@project_router.get("/{project_id}", response_class=HTMLResponse, response_model=None)
async def ui_project(request: Request, project_id: str) -> Response:
    session = get_session(request)
    if session is None:
        return RedirectResponse(url=SIGN_IN_PATH, status_code=302)

    store = SqliteProjectStore(get_db_path(request), session.user_id)
    project = await store.get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")

    projects = await store.list_projects()
    return templates.TemplateResponse(
        request,
        "project.html",
        {
            "title": f"{project.name} • UIGen",
            "project": project,
            "projects": projects,
            "messages": [_message_view(m) for m in project.messages],
            "files": sorted(project.data.keys()),
            "email": session.email,
        },
    )
