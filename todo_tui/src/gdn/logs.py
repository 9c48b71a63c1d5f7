from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .settings import LOG_FILE_NAME, Settings

# Parent of every module logger in this package
PACKAGE_LOGGER = __name__.rpartition(".")[0]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def configure_logging(settings: Settings) -> None:
    """
    Send application logs to stderr. Used until curses takes over the terminal.
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(settings.log_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.handlers[:] = [handler]


# PUBLIC_INTERFACE
def redirect_logging_to_file(settings: Settings, data_dir: Optional[Path]) -> Optional[Path]:
    """
    Replace the stderr handler with a file handler, since curses owns the
    terminal while the UI runs. Return the log file path, or None if no
    location is known or the file cannot be opened (logs are then discarded).
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if settings.log_file:
        path: Optional[Path] = Path(settings.log_file)
    elif data_dir is not None:
        path = data_dir / LOG_FILE_NAME
    else:
        path = None

    if path is None:
        root.handlers[:] = [logging.NullHandler()]
        return None

    try:
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot open log file %s, logging disabled: %s", path, e)
        root.handlers[:] = [logging.NullHandler()]
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.handlers[:] = [handler]
    return path
