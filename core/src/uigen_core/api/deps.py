from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Final

from fastapi import HTTPException, Request
from starlette.responses import Response

from uigen_core.accounts import SqliteAccountActions
from uigen_core.anon_work import InMemoryAnonWorkStore, SqliteAnonWorkStore
from uigen_core.auth import (
    ANON_COOKIE,
    DEFAULT_SESSION_TTL,
    SessionSettings,
    create_session,
    get_token_service,
)
from uigen_core.db.ids import new_anon_id
from uigen_core.gateway import AuthGateway
from uigen_core.projects import SqliteProjectStore
from uigen_core.reconcile import DesignCounter, Navigate, SessionReconciler

ANON_COOKIE_MAX_AGE: Final[int] = 60 * 60 * 24 * 30


def get_db_path(request: Request) -> Path:
    db_path = getattr(request.app.state, "db_path", None)
    if db_path is None:
        raise HTTPException(status_code=500, detail="DB not initialized")
    return db_path


def get_session_settings(request: Request) -> SessionSettings:
    auth = getattr(getattr(request.app.state, "uigen_config", None), "auth", None)
    if auth is None:
        return SessionSettings(ttl=DEFAULT_SESSION_TTL, secure=False)
    return SessionSettings(
        ttl=timedelta(days=auth.session_ttl_days),
        secure=auth.secure_cookies,
    )


def get_design_counter(request: Request) -> DesignCounter:
    counter = getattr(request.app.state, "design_counter", None)
    if counter is None:
        counter = DesignCounter()
        request.app.state.design_counter = counter
    return counter


def ensure_anon_id(request: Request, response: Response) -> str:
    """Return the visitor's anonymous ID, issuing the uigen-anon cookie if needed."""

    existing = request.cookies.get(ANON_COOKIE)
    if existing:
        return existing

    anon_id = new_anon_id()
    response.set_cookie(
        ANON_COOKIE,
        anon_id,
        httponly=True,
        secure=get_session_settings(request).secure,
        samesite="lax",
        path="/",
        max_age=ANON_COOKIE_MAX_AGE,
    )
    return anon_id


def build_auth_gateway(request: Request, response: Response, navigate: Navigate) -> AuthGateway:
    """Wire the gateway for one HTTP request.

    The auth-token cookie lands on `response`; reconciliation runs against the
    visitor's anonymous work and the projects of whoever just signed in.
    """

    db_path = get_db_path(request)
    tokens = get_token_service(request)
    settings = get_session_settings(request)
    signed_in: dict[str, str] = {}

    def issue_session(*, user_id: str, email: str) -> None:
        create_session(response, tokens, user_id=user_id, email=email, settings=settings)
        signed_in["user_id"] = user_id

    def reconciler() -> SessionReconciler:
        anon_id = request.cookies.get(ANON_COOKIE)
        anon_work = (
            SqliteAnonWorkStore(db_path, anon_id) if anon_id else InMemoryAnonWorkStore()
        )
        return SessionReconciler(
            anon_work=anon_work,
            projects=SqliteProjectStore(db_path, signed_in["user_id"]),
            navigate=navigate,
            counter=get_design_counter(request),
        )

    actions = SqliteAccountActions(db_path, issue_session=issue_session)
    return AuthGateway(actions, reconciler)
