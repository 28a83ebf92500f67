"""Error taxonomy for the record store.

Only ``DatabaseConnectionError`` is ever raised out of the store. The other
errors are carried inside failed operation results.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for record store failures."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class DatabaseConnectionError(StoreError):
    """The backend could not be reached. Fatal at initialization."""


class RollbackError(StoreError):
    """A rollback issued after a failed statement failed as well."""


class _StatementError(StoreError):
    """A statement failed; may carry the secondary rollback failure."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        rollback_error: RollbackError | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.rollback_error = rollback_error


class SchemaError(_StatementError):
    """Creating the employees table failed."""


class ExecutionError(_StatementError):
    """An insert, update, delete or query failed."""
