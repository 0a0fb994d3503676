from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Final, Protocol

import jwt

logger = logging.getLogger(__name__)

JWT_ALGORITHM: Final[str] = "HS256"


class TokenService(Protocol):
    """Issues and verifies signed, time-limited credentials."""

    def sign(
        self,
        claims: dict[str, Any],
        ttl: timedelta,
        *,
        now: datetime | None = None,
    ) -> str: ...

    def verify(self, token: str) -> dict[str, Any] | None: ...


class JwtTokenService:
    """HS256 JWTs via PyJWT.

    `sign` stamps `iat` and `exp` (issuance + ttl); `verify` returns the decoded
    claims, or None for expired, tampered or malformed tokens.
    """

    def __init__(self, secret: str, *, algorithm: str = JWT_ALGORITHM) -> None:
        if not secret:
            raise ValueError("JWT secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm

    def sign(
        self,
        claims: dict[str, Any],
        ttl: timedelta,
        *,
        now: datetime | None = None,
    ) -> str:
        issued_at = now or datetime.now(UTC)
        payload = dict(claims)
        payload["iat"] = int(issued_at.timestamp())
        payload["exp"] = int((issued_at + ttl).timestamp())
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any] | None:
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired session token")
            return None
        except jwt.InvalidTokenError:
            return None
