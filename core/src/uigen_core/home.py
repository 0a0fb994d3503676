"""UIGEN_HOME: where the core keeps its database, logs and config.

Layout:

    db/       core.sqlite3 (users, projects, pending anonymous work)
    logs/     core.log, rotated
    config/   core.json, which may hold the generated JWT signing secret
    tmp/
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

# config/ may hold the session signing secret.
CONFIG_DIR_MODE = 0o700


@dataclass(frozen=True)
class UIGenPaths:
    home: Path
    db_dir: Path
    logs_dir: Path
    config_dir: Path
    tmp_dir: Path

    @property
    def core_config_path(self) -> Path:
        return self.config_dir / "core.json"

    @property
    def log_path(self) -> Path:
        return self.logs_dir / "core.log"


def _platform_default_home() -> Path:
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        return Path(base) / "UIGen" if base else Path.home() / "AppData" / "Local" / "UIGen"

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "UIGen"

    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) / "uigen" if xdg else Path.home() / ".local" / "share" / "uigen"


def resolve_uigen_home(environ: dict[str, str] | None = None) -> Path:
    """UIGEN_HOME if set (relative values live under the user's home), else a per-user default."""

    env = os.environ if environ is None else environ

    raw = (env.get("UIGEN_HOME") or "").strip()
    if not raw:
        return _platform_default_home().resolve()

    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = Path.home() / candidate
    return candidate.resolve()


def ensure_uigen_layout(home: Path) -> UIGenPaths:
    paths = UIGenPaths(
        home=home,
        db_dir=home / "db",
        logs_dir=home / "logs",
        config_dir=home / "config",
        tmp_dir=home / "tmp",
    )

    for path in (paths.db_dir, paths.logs_dir, paths.config_dir, paths.tmp_dir):
        path.mkdir(parents=True, exist_ok=True)

    if os.name == "posix":
        paths.config_dir.chmod(CONFIG_DIR_MODE)

    return paths
