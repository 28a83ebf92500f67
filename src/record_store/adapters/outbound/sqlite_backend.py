"""SQLite implementation of the DatabaseBackend port.

Connections are opened with ``autocommit=False`` so that a transaction is
always open: every statement joins it and nothing is durable until
``commit()``. DDL is transactional under this mode as well.

The driver module is resolved when the first connection is opened, so a
Python build without ``sqlite3`` surfaces as a ``BackendError`` from
``connect()`` rather than an import failure of the whole package.
"""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any, Iterator, Sequence

from record_store.infrastructure.logging import get_logger
from record_store.ports.outbound import BackendError


logger = get_logger(__name__)


class SQLiteCursor:
    """BackendCursor over a ``sqlite3.Cursor``."""

    def __init__(self, cursor: Any, driver: ModuleType) -> None:
        self._cursor = cursor
        self._driver = driver

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    @property
    def lastrowid(self) -> int | None:
        return self._cursor.lastrowid

    def __iter__(self) -> Iterator[Sequence[Any]]:
        try:
            for row in self._cursor:
                yield row
        except self._driver.Error as e:
            raise BackendError(str(e)) from e

    def close(self) -> None:
        try:
            self._cursor.close()
        except self._driver.Error as e:
            raise BackendError(str(e)) from e


class SQLiteConnection:
    """BackendConnection over a ``sqlite3.Connection``."""

    def __init__(self, connection: Any, driver: ModuleType) -> None:
        self._connection = connection
        self._driver = driver

    def execute(self, sql: str, params: Sequence[Any] = ()) -> SQLiteCursor:
        try:
            cursor = self._connection.execute(sql, tuple(params))
        except self._driver.Error as e:
            raise BackendError(str(e)) from e
        except (OverflowError, ValueError) as e:
            # parameter binding: integers beyond 64 bits, unencodable text
            raise BackendError(str(e)) from e
        return SQLiteCursor(cursor, self._driver)

    def commit(self) -> None:
        try:
            self._connection.commit()
        except self._driver.Error as e:
            raise BackendError(str(e)) from e

    def rollback(self) -> None:
        try:
            self._connection.rollback()
        except self._driver.Error as e:
            raise BackendError(str(e)) from e

    def close(self) -> None:
        try:
            self._connection.close()
        except self._driver.Error as e:
            raise BackendError(str(e)) from e


class SQLiteBackend:
    """DatabaseBackend backed by the standard library ``sqlite3`` driver.

    Attributes:
        timeout: Seconds a statement waits on a locked database file.
    """

    def __init__(self, timeout: float = 5.0, driver_name: str = "sqlite3") -> None:
        self.timeout = timeout
        self._driver_name = driver_name

    def _load_driver(self) -> ModuleType:
        try:
            return importlib.import_module(self._driver_name)
        except ImportError as e:
            raise BackendError(f"SQLite driver not found: {e}") from e

    def connect(self, database: str) -> SQLiteConnection:
        driver = self._load_driver()
        try:
            connection = driver.connect(database, timeout=self.timeout, autocommit=False)
        except driver.Error as e:
            raise BackendError(str(e)) from e
        logger.debug("sqlite_connection_opened", database=database)
        return SQLiteConnection(connection, driver)
