from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

APP_NAME = "gdn"
DB_FILE_NAME = "db.sqlite"
LOG_FILE_NAME = "gdn.log"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - GDN_PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - GDN_DB_PATH: explicit path to the sqlite db file. Default: '<data dir>/db.sqlite'
    - GDN_LOG_LEVEL: logging level name (default: WARNING)
    - GDN_LOG_FILE: path to the log file. Default: '<data dir>/gdn.log'
    """

    persistence_backend: str
    db_path: Optional[str]
    log_level: int
    log_file: Optional[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_log_level(value: str, default: int = logging.WARNING) -> int:
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    return default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("GDN_PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        backend = "sqlite"

    db_path = _get_env("GDN_DB_PATH", "").strip() or None
    log_file = _get_env("GDN_LOG_FILE", "").strip() or None

    return Settings(
        persistence_backend=backend,
        db_path=db_path,
        log_level=_parse_log_level(_get_env("GDN_LOG_LEVEL", "WARNING")),
        log_file=log_file,
    )
