from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from uigen_core.api.models import ApiResponse, ok
from uigen_core.tool_invocation import ToolState, describe_tool_invocation

router = APIRouter(tags=["tool-invocations"])


class ToolInvocationRequest(BaseModel):
    tool_name: str
    args: str | dict[str, Any]
    state: ToolState
    result: Any | None = None


class ToolInvocationOut(BaseModel):
    icon: str
    label: str
    complete: bool


@router.post("/tool-invocations/describe", response_model=ApiResponse[ToolInvocationOut])
async def tool_invocations_describe(
    payload: ToolInvocationRequest,
) -> ApiResponse[ToolInvocationOut]:
    try:
        view = describe_tool_invocation(
            payload.tool_name, payload.args, payload.state, payload.result
        )
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=422, detail=f"args is not valid JSON: {exc.msg}") from exc

    return ok(ToolInvocationOut(icon=view.icon, label=view.label, complete=view.complete))
