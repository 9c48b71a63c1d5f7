from __future__ import annotations

import logging
import os
import sqlite3
from dataclasses import dataclass
from typing import List, Optional

from .errors import StorageError
from .models import TodoEntity
from .repositories import Repository
from .schemas import TodoCreate, TodoOut

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite repository holding a single long-lived connection.

    The connection is opened in the constructor and released by close().
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None
        try:
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
            self._conn = sqlite3.connect(db_path)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open database {db_path}: {e}") from e
        self._conn.row_factory = sqlite3.Row
        try:
            self.init_schema()
        except StorageError:
            self.close()
            raise
        logger.debug("Opened database %s", db_path)

    @property
    def db_path(self) -> str:
        return self._db_path

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("database connection is closed")
        return self._conn

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        conn = self._require_conn()
        try:
            with conn:
                return conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        conn = self._require_conn()
        try:
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def init_schema(self) -> None:
        """Create the todos table if it does not exist. Safe to repeat."""
        self._execute(
            f"""
            CREATE TABLE IF NOT EXISTS {_COLS.table} (
                {_COLS.id} INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
                {_COLS.title} TEXT
            )
            """
        )

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        out = TodoOut(id=row[_COLS.id], title=row[_COLS.title])
        return {"id": out.id, "title": out.title}

    def create(self, data: TodoCreate) -> int:
        cur = self._execute(
            f"INSERT INTO {_COLS.table} ({_COLS.title}) VALUES (?)", (data.title,)
        )
        new_id = cur.lastrowid
        assert new_id is not None
        logger.debug("Created todo %d", new_id)
        return int(new_id)

    def list(self) -> List[TodoEntity]:
        rows = self._query(f"SELECT {_COLS.id}, {_COLS.title} FROM {_COLS.table}")
        return [self._row_to_entity(r) for r in rows]

    def delete(self, todo_id: int) -> bool:
        cur = self._execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
        deleted = cur.rowcount > 0
        logger.debug("Delete todo %d: %s", todo_id, "removed" if deleted else "not found")
        return deleted

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed database %s", self._db_path)
