from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Literal, Protocol

import bcrypt
from pydantic import BaseModel

from uigen_core.db.users import (
    EmailAlreadyRegisteredError,
    create_user,
    get_user_by_email,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH: Final[int] = 8
# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES: Final[int] = 72
BCRYPT_ROUNDS: Final[int] = 10


class AuthSuccess(BaseModel):
    success: Literal[True] = True


class AuthFailure(BaseModel):
    success: Literal[False] = False
    error: str


# `success` alone tells the two shapes apart.
AuthResult = AuthSuccess | AuthFailure


class SessionWriter(Protocol):
    def __call__(self, *, user_id: str, email: str) -> None: ...


class AccountActions(Protocol):
    async def sign_in(self, email: str, password: str) -> AuthResult: ...

    async def sign_up(self, email: str, password: str) -> AuthResult: ...


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


class SqliteAccountActions:
    """Credential checks and account creation against the users table.

    On success a session is handed to `issue_session`, which the HTTP layer
    binds to the outgoing response's auth-token cookie.
    """

    def __init__(self, db_path: Path, *, issue_session: SessionWriter) -> None:
        self._db_path = db_path
        self._issue_session = issue_session

    async def sign_up(self, email: str, password: str) -> AuthResult:
        email = (email or "").strip()
        if not email or not password:
            return AuthFailure(error="Email and password are required")

        if len(password) < MIN_PASSWORD_LENGTH:
            return AuthFailure(
                error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return AuthFailure(error=f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if get_user_by_email(self._db_path, email=email) is not None:
            return AuthFailure(error="Email already registered")

        try:
            user = create_user(self._db_path, email=email, password_hash=hash_password(password))
        except EmailAlreadyRegisteredError:
            # Lost a race with a concurrent sign-up for the same address.
            return AuthFailure(error="Email already registered")

        logger.info("Registered user %s", user.user_id)
        self._issue_session(user_id=user.user_id, email=user.email)
        return AuthSuccess()

    async def sign_in(self, email: str, password: str) -> AuthResult:
        email = (email or "").strip()
        if not email or not password:
            return AuthFailure(error="Email and password are required")

        user = get_user_by_email(self._db_path, email=email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected sign-in attempt")
            return AuthFailure(error="Invalid credentials")

        logger.info("Signed in user %s", user.user_id)
        self._issue_session(user_id=user.user_id, email=user.email)
        return AuthSuccess()
