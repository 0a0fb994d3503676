from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from uigen_core.api.deps import build_auth_gateway, get_db_path
from uigen_core.api.models import ApiResponse, ok
from uigen_core.auth import delete_session, get_session
from uigen_core.db.users import get_user

router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    email: str
    password: str


class AuthOutcome(BaseModel):
    success: bool
    error: str | None = None
    redirect: str | None = None


class SessionUser(BaseModel):
    user_id: str
    email: str
    expires_at: str


async def _authenticate(
    request: Request,
    response: Response,
    payload: Credentials,
    *,
    sign_up: bool,
) -> ApiResponse[AuthOutcome]:
    targets: list[str] = []
    gateway = build_auth_gateway(request, response, targets.append)

    if sign_up:
        result = await gateway.sign_up(payload.email, payload.password)
    else:
        result = await gateway.sign_in(payload.email, payload.password)

    if not result.success:
        # Domain failures are data: 200 with success=false.
        return ok(AuthOutcome(success=False, error=result.error))
    return ok(AuthOutcome(success=True, redirect=targets[0] if targets else None))


@router.post("/sign-in", response_model=ApiResponse[AuthOutcome])
async def auth_sign_in(
    request: Request, response: Response, payload: Credentials
) -> ApiResponse[AuthOutcome]:
    return await _authenticate(request, response, payload, sign_up=False)


@router.post("/sign-up", response_model=ApiResponse[AuthOutcome])
async def auth_sign_up(
    request: Request, response: Response, payload: Credentials
) -> ApiResponse[AuthOutcome]:
    return await _authenticate(request, response, payload, sign_up=True)


@router.post("/sign-out", response_model=ApiResponse[dict[str, bool]])
async def auth_sign_out(response: Response) -> ApiResponse[dict[str, bool]]:
    delete_session(response)
    return ok({"signed_out": True})


@router.get("/session", response_model=ApiResponse[SessionUser])
async def auth_session(request: Request) -> ApiResponse[SessionUser]:
    session = get_session(request)
    if session is None:
        raise HTTPException(status_code=401, detail="Not signed in")

    user = get_user(get_db_path(request), user_id=session.user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Not signed in")

    return ok(
        SessionUser(
            user_id=user.user_id,
            email=user.email,
            expires_at=session.expires_at.isoformat(),
        )
    )
