from __future__ import annotations

import json
import os
import secrets
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from uigen_core.home import UIGenPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    core_port: int = Field(default=3000, ge=1, le=65535)


class PathOverrides(BaseModel):
    db_dir: str | None = None
    logs_dir: str | None = None


class AuthConfig(BaseModel):
    jwt_secret: str | None = Field(default=None)
    session_ttl_days: int = Field(
        default=7, ge=1, description="Lifetime of the auth-token cookie and its JWT."
    )
    environment: Literal["development", "production"] = Field(
        default="development",
        description="In production the auth-token cookie is marked Secure.",
    )

    @property
    def secure_cookies(self) -> bool:
        return self.environment == "production"


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: UIGenPaths) -> CoreConfig:
    """Load config from ${UIGEN_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def write_core_config(paths: UIGenPaths, config: CoreConfig) -> None:
    """Persist config to ${UIGEN_HOME}/config/core.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.core_config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def apply_env_overrides(config: CoreConfig, environ: dict[str, str] | None = None) -> CoreConfig:
    """Overlay UIGEN_JWT_SECRET / UIGEN_ENV onto the loaded config.

    Overrides are never written back to core.json.
    """

    env = os.environ if environ is None else environ

    update: dict[str, Any] = {}
    secret = (env.get("UIGEN_JWT_SECRET") or "").strip()
    if secret:
        update["jwt_secret"] = secret

    environment = (env.get("UIGEN_ENV") or "").strip().lower()
    if environment:
        update["environment"] = environment

    if not update:
        return config

    auth = AuthConfig.model_validate({**config.auth.model_dump(), **update})
    return config.model_copy(update={"auth": auth})


def ensure_jwt_secret(
    paths: UIGenPaths, config: CoreConfig, environ: dict[str, str] | None = None
) -> CoreConfig:
    """Ensure a JWT signing secret exists and is stored in config.

    If missing, generate a new secret and persist it to core.json. Nothing is
    generated while UIGEN_JWT_SECRET supplies the secret.
    """

    env = os.environ if environ is None else environ
    if (env.get("UIGEN_JWT_SECRET") or "").strip():
        return config

    raw = (config.auth.jwt_secret or "").strip()
    if raw:
        return config

    secret = secrets.token_urlsafe(32)
    updated_auth = config.auth.model_copy(update={"jwt_secret": secret})
    updated = config.model_copy(update={"auth": updated_auth})
    write_core_config(paths, updated)
    return updated


def resolve_configured_paths(paths: UIGenPaths, config: CoreConfig) -> UIGenPaths:
    """Apply user-configurable path overrides from config.

    Note: config/ and tmp/ are not configurable.
    """

    def _resolve_dir(raw: str | None, default: Path) -> Path:
        if raw is None or not str(raw).strip():
            return default
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = (paths.home / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate

    db_dir = _resolve_dir(config.paths.db_dir, paths.db_dir)
    logs_dir = _resolve_dir(config.paths.logs_dir, paths.logs_dir)

    for p in (db_dir, logs_dir):
        p.mkdir(parents=True, exist_ok=True)

    return UIGenPaths(
        home=paths.home,
        db_dir=db_dir,
        logs_dir=logs_dir,
        config_dir=paths.config_dir,
        tmp_dir=paths.tmp_dir,
    )
