from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .controller import Controller
from .errors import DataDirNotFoundError, StorageError
from .logs import configure_logging, redirect_logging_to_file
from .repositories import get_repository
from .settings import get_settings
from .view import start_curses

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main() -> None:
    """
    Console entry point.

    Opens the configured repository, runs the curses UI, and closes the
    database on exit. Failing to resolve the data directory or open the
    database is fatal (exit status 1).
    """
    settings = get_settings()
    configure_logging(settings)

    try:
        repo = get_repository(settings)
    except (DataDirNotFoundError, StorageError) as e:
        logger.error("Cannot start: %s", e)
        sys.exit(1)

    db_path = getattr(repo, "db_path", None)
    data_dir: Optional[Path] = Path(db_path).parent if db_path else None
    redirect_logging_to_file(settings, data_dir)

    with repo:
        start_curses(Controller(repo))


if __name__ == "__main__":
    main()
