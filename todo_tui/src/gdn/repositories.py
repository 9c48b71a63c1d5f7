from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .errors import StorageError
from .models import TodoEntity
from .schemas import TodoCreate
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract repository contract for to-do storage backends.

    Every operation raises StorageError when the backend fails. A repository
    owns its resources and releases them on close(); it can be used as a
    context manager.
    """

    @abstractmethod
    def create(self, data: TodoCreate) -> int:
        """Insert a new item and return its identifier."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return all items in storage order."""

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete an item by id. Return True if a row was removed; a missing id is not an error."""

    def close(self) -> None:
        """Release backend resources. Safe to call more than once."""

    def __enter__(self) -> "Repository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class InMemoryRepository(Repository):
    """
    In-memory repository suitable for testing.

    Identifiers are allocated monotonically and never reused, matching the
    sqlite backend.
    """

    def __init__(self) -> None:
        self._items: Dict[int, TodoEntity] = {}
        self._next_id = 1
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("repository is closed")

    def create(self, data: TodoCreate) -> int:
        self._check_open()
        todo_id = self._next_id
        self._next_id += 1
        self._items[todo_id] = {"id": todo_id, "title": data.title}
        return todo_id

    def list(self) -> List[TodoEntity]:
        self._check_open()
        # Return copies to avoid external mutation
        return [t.copy() for t in self._items.values()]

    def delete(self, todo_id: int) -> bool:
        self._check_open()
        return self._items.pop(todo_id, None) is not None

    def close(self) -> None:
        self._closed = True


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Factory to return the configured repository.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository at GDN_DB_PATH, or '<data dir>/db.sqlite'

    Raises:
        DataDirNotFoundError: no data directory could be resolved.
        StorageError: the database could not be opened or initialized.
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "memory":
        logger.info("Using in-memory storage")
        return InMemoryRepository()

    from .db import SQLiteRepository
    from .paths import default_db_path

    db_path = settings.db_path or str(default_db_path())
    return SQLiteRepository(db_path)
