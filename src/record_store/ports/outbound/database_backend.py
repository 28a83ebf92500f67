"""Database backend port for embedded relational engines.

This outbound port defines the minimal contract the record store needs
from an embedded SQL engine: open a connection, run a parameterized
statement, commit, roll back and close.

Implementations must translate every driver-specific failure into
``BackendError`` so the store never depends on a driver's exception types.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Iterator, Protocol, Sequence


class BackendError(Exception):
    """A backend call failed (driver missing, SQL error, I/O error)."""


class BackendCursor(Protocol):
    """Forward-only handle on an executed statement."""

    @property
    @abstractmethod
    def rowcount(self) -> int:
        """Rows changed by a DML statement; -1 when not applicable."""
        ...

    @property
    @abstractmethod
    def lastrowid(self) -> int | None:
        """Id of the last inserted row, if the statement inserted one."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Sequence[Any]]:
        """Stream result rows in backend order.

        Raises:
            BackendError: If fetching a row fails.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the statement and any pending result rows."""
        ...


class BackendConnection(Protocol):
    """An open connection with auto-commit disabled.

    Every statement joins the connection's current transaction, which
    stays open until ``commit()`` or ``rollback()``.
    """

    @abstractmethod
    def execute(self, sql: str, params: Sequence[Any] = ()) -> BackendCursor:
        """Execute one statement with positionally bound parameters.

        Args:
            sql: Statement text using ``?`` placeholders.
            params: Values bound in placeholder order.

        Returns:
            A cursor over the executed statement.

        Raises:
            BackendError: If the statement fails.
        """
        ...

    @abstractmethod
    def commit(self) -> None:
        """Make the current transaction durable.

        Raises:
            BackendError: If the commit fails.
        """
        ...

    @abstractmethod
    def rollback(self) -> None:
        """Discard the current transaction.

        Raises:
            BackendError: If the rollback fails.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection.

        Raises:
            BackendError: If the release fails.
        """
        ...


class DatabaseBackend(Protocol):
    """Factory for backend connections."""

    @abstractmethod
    def connect(self, database: str) -> BackendConnection:
        """Open a connection to a local database.

        Args:
            database: Database file path (``":memory:"`` for a private
                in-memory database).

        Returns:
            An open connection with auto-commit disabled.

        Raises:
            BackendError: If the driver is unavailable or the database
                cannot be opened.
        """
        ...
