from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final

from fastapi import HTTPException, Request
from starlette.responses import Response

from uigen_core.tokens import TokenService

AUTH_COOKIE: Final[str] = "auth-token"
ANON_COOKIE: Final[str] = "uigen-anon"

DEFAULT_SESSION_TTL: Final[timedelta] = timedelta(days=7)


@dataclass(frozen=True)
class SessionPayload:
    user_id: str
    email: str
    expires_at: datetime


@dataclass(frozen=True)
class SessionSettings:
    ttl: timedelta = DEFAULT_SESSION_TTL
    secure: bool = False


def create_session(
    response: Response,
    tokens: TokenService,
    *,
    user_id: str,
    email: str,
    settings: SessionSettings,
    now: datetime | None = None,
) -> str:
    """Sign a session token and attach it to `response` as the auth-token cookie.

    The cookie expiry and the token's `exp` claim are both issuance + ttl.
    """

    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + settings.ttl

    claims = {
        "userId": user_id,
        "email": email,
        "expiresAt": expires_at.isoformat(),
    }
    token = tokens.sign(claims, settings.ttl, now=issued_at)

    response.set_cookie(
        AUTH_COOKIE,
        token,
        httponly=True,
        secure=settings.secure,
        samesite="lax",
        path="/",
        expires=expires_at,
    )
    return token


def delete_session(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE, path="/")


def verify_session(token: str | None, tokens: TokenService) -> SessionPayload | None:
    if not token:
        return None

    claims = tokens.verify(token)
    if claims is None:
        return None

    user_id = claims.get("userId")
    email = claims.get("email")
    if not isinstance(user_id, str) or not isinstance(email, str):
        return None

    exp = claims.get("exp")
    expires_at = (
        datetime.fromtimestamp(int(exp), tz=UTC) if isinstance(exp, int | float) else None
    )
    if expires_at is None:
        return None

    return SessionPayload(user_id=user_id, email=email, expires_at=expires_at)


def get_token_service(request: Request) -> TokenService:
    tokens = getattr(request.app.state, "token_service", None)
    if tokens is None:
        raise HTTPException(status_code=500, detail="Token service not initialized")
    return tokens


def get_session(request: Request) -> SessionPayload | None:
    return verify_session(request.cookies.get(AUTH_COOKIE), get_token_service(request))


async def require_session(request: Request) -> SessionPayload:
    """FastAPI dependency: the signed-in user's session, or 401."""

    session = get_session(request)
    if session is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return session
