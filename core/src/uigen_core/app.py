from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles

from uigen_core.anon_work import InMemoryAnonWorkStore
from uigen_core.api.models import fail, status_to_code
from uigen_core.api.v1.router import router as v1_router
from uigen_core.auth import get_session
from uigen_core.config import (
    apply_env_overrides,
    ensure_jwt_secret,
    load_core_config,
    resolve_configured_paths,
)
from uigen_core.db import resolve_db_path
from uigen_core.db.migrate import apply_migrations
from uigen_core.home import ensure_uigen_layout, resolve_uigen_home
from uigen_core.projects import SqliteProjectStore
from uigen_core.reconcile import DesignCounter, SessionReconciler
from uigen_core.tokens import JwtTokenService
from uigen_core.ui.router import SIGN_IN_PATH, project_router
from uigen_core.ui.router import STATIC_DIR as UI_STATIC_DIR
from uigen_core.ui.router import router as ui_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_uigen_home()
        paths = ensure_uigen_layout(home)
        config = load_core_config(paths)
        paths = resolve_configured_paths(paths, config)
        config = ensure_jwt_secret(paths, config)
        config = apply_env_overrides(config)

        # Configure Logging
        log_path = paths.log_path
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.logging.max_size_mb * 1024 * 1024,
            backupCount=config.logging.backup_count,
            encoding="utf-8",
        )
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)

        # Configure root logger to capture all module logs
        root = logging.getLogger()
        root.setLevel(logging.INFO)
        # Avoid adding duplicate handlers if reloaded
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            root.addHandler(file_handler)

        logger.info("UIGen Core starting up (%s)", config.auth.environment)
        logger.info("Logs directory: %s", paths.logs_dir)

        db_path = resolve_db_path(paths)
        apply_migrations(db_path)

        app.state.uigen_home = home
        app.state.uigen_paths = paths
        app.state.uigen_config = config
        app.state.db_path = db_path
        app.state.token_service = JwtTokenService(config.auth.jwt_secret or "")
        app.state.design_counter = DesignCounter()

        yield

    app = FastAPI(title="UIGen Core", version="0.1.0", lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s - %s", request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=exc.errors(),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=str(exc.detail),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=status_to_code(exc.status_code),
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=fail(code="internal_error", message="Internal server error").model_dump(
                mode="json"
            ),
        )

    app.include_router(v1_router)

    if UI_STATIC_DIR.is_dir():
        app.mount(
            "/ui/static",
            StaticFiles(directory=str(UI_STATIC_DIR)),
            name="ui-static",
        )
    else:
        logger.warning(
            "UI static directory is missing (%s); /ui/static will not be served",
            UI_STATIC_DIR,
        )
    app.include_router(ui_router)

    @app.get("/")
    async def root(request: Request) -> RedirectResponse:
        session = get_session(request)
        if session is None:
            return RedirectResponse(url=SIGN_IN_PATH, status_code=302)

        # Same routing as after sign-in, minus anonymous work: resume the latest
        # project or start an empty one.
        reconciler = SessionReconciler(
            anon_work=InMemoryAnonWorkStore(),
            projects=SqliteProjectStore(request.app.state.db_path, session.user_id),
            navigate=lambda _target: None,
            counter=request.app.state.design_counter,
        )
        outcome = await reconciler.reconcile()
        return RedirectResponse(url=outcome.target, status_code=302)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    # Catch-all `/{project_id}` goes last.
    app.include_router(project_router)

    return app
