from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from uigen_core.api.models import ApiResponse, ok
from uigen_core.prompts import GENERATION_PROMPT

router = APIRouter(tags=["prompts"])


class PromptOut(BaseModel):
    name: str
    prompt: str


@router.get("/prompts/generation", response_model=ApiResponse[PromptOut])
async def prompts_generation() -> ApiResponse[PromptOut]:
    return ok(PromptOut(name="generation", prompt=GENERATION_PROMPT))
