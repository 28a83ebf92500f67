"""Explicit result values returned by store operations.

Mutating operations return an ``OperationResult``; queries return a
``QueryResult`` that streams employees lazily. A statement that touched no
rows is reported with ``OperationStatus.NOT_FOUND``, which is not a failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from record_store.domain.errors import StoreError

if TYPE_CHECKING:
    from record_store.domain.entities import Employee


class OperationStatus(Enum):
    """How a store operation ended."""

    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a single-statement transaction.

    Attributes:
        operation: Name of the store operation (e.g. ``"insert"``)
        status: OK, NOT_FOUND or FAILED
        rows_affected: Rows changed by the statement (0 when failed)
        last_row_id: Backend-assigned id of an inserted row, if any
        employee_id: Id targeted by an update or delete, if any
        error: The failure, set only when status is FAILED
    """

    operation: str
    status: OperationStatus
    rows_affected: int = 0
    last_row_id: int | None = None
    employee_id: int | None = None
    error: StoreError | None = None

    @classmethod
    def completed(
        cls,
        operation: str,
        rows_affected: int,
        *,
        last_row_id: int | None = None,
        employee_id: int | None = None,
        zero_is_not_found: bool = False,
    ) -> OperationResult:
        """Build the result of a committed statement."""
        status = OperationStatus.OK
        if zero_is_not_found and rows_affected == 0:
            status = OperationStatus.NOT_FOUND
        return cls(operation, status, rows_affected, last_row_id, employee_id)

    @classmethod
    def failure(
        cls, operation: str, error: StoreError, employee_id: int | None = None
    ) -> OperationResult:
        """Build the result of a statement that was rolled back."""
        return cls(operation, OperationStatus.FAILED, employee_id=employee_id, error=error)

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.OK

    @property
    def found(self) -> bool:
        return self.status is not OperationStatus.NOT_FOUND

    @property
    def failed(self) -> bool:
        return self.status is OperationStatus.FAILED


@dataclass(slots=True)
class QueryResult:
    """Lazily streamed employees from a single query.

    Iterable exactly once: the underlying cursor is forward-only and is
    released when iteration ends, fails, or ``close()`` is called.
    """

    operation: str
    _records: Iterator[Employee] = field(default_factory=lambda: iter(()), repr=False)
    error: StoreError | None = None

    @classmethod
    def failure(cls, operation: str, error: StoreError) -> QueryResult:
        return cls(operation, iter(()), error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __iter__(self) -> Iterator[Employee]:
        return self._records

    def close(self) -> None:
        """Release the cursor without consuming the remaining rows."""
        close = getattr(self._records, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> QueryResult:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
