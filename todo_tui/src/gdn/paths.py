from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .errors import DataDirNotFoundError
from .settings import APP_NAME, DB_FILE_NAME

logger = logging.getLogger(__name__)


def _writable(path: Path) -> bool:
    return os.access(path, os.W_OK)


def _candidates(environ: Mapping[str, str]):
    xdg_data_home = environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        yield Path(xdg_data_home)

    home = environ.get("HOME")
    if home:
        yield Path(home) / ".local" / "share"


# PUBLIC_INTERFACE
def resolve_data_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Return the application's data directory, creating it if needed.

    Resolution order:
    1. $XDG_DATA_HOME/gdn, if XDG_DATA_HOME is set and writable
    2. $HOME/.local/share/gdn, if HOME is set and ~/.local/share is writable

    Raises:
        DataDirNotFoundError: neither location is usable.
    """
    env = os.environ if environ is None else environ
    for base in _candidates(env):
        if not _writable(base):
            logger.debug("Skipping non-writable data home %s", base)
            continue
        data_dir = base / APP_NAME
        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DataDirNotFoundError(f"Cannot create data directory {data_dir}: {e}") from e
        return data_dir

    raise DataDirNotFoundError(
        "No writable data directory: set XDG_DATA_HOME or HOME to a writable location"
    )


# PUBLIC_INTERFACE
def default_db_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return '<data dir>/db.sqlite'."""
    return resolve_data_dir(environ) / DB_FILE_NAME
