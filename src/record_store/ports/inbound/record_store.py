"""Record Store port - the API offered to callers.

Every mutating operation is its own transaction: it is committed before
the call returns or rolled back on failure. Outcomes are returned as
values; only ``initialize()`` raises.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from record_store.domain.value_objects import (
    ConnectionState,
    EmployeeId,
    OperationResult,
    QueryResult,
)


class RecordStore(Protocol):
    """Protocol for transactional access to the employees table."""

    @property
    @abstractmethod
    def state(self) -> ConnectionState:
        """Current connection lifecycle state."""
        ...

    @abstractmethod
    def initialize(self) -> None:
        """Open the backend connection with auto-commit disabled.

        Raises:
            DatabaseConnectionError: If the backend is unavailable, the
                database cannot be opened, or the store was closed.
        """
        ...

    @abstractmethod
    def ensure_schema(self) -> OperationResult:
        """Create the employees table if it does not exist."""
        ...

    @abstractmethod
    def insert(self, name: str, position: str, salary: float | None) -> OperationResult:
        """Insert one employee; the backend assigns its id."""
        ...

    @abstractmethod
    def update_salary(self, employee_id: EmployeeId, new_salary: float) -> OperationResult:
        """Set one employee's salary. Zero rows affected is NOT_FOUND."""
        ...

    @abstractmethod
    def delete(self, employee_id: EmployeeId) -> OperationResult:
        """Delete one employee by id. Zero rows affected is NOT_FOUND."""
        ...

    @abstractmethod
    def list_all(self) -> QueryResult:
        """Stream every employee in backend order."""
        ...

    @abstractmethod
    def find_by_position(self, substring: str) -> QueryResult:
        """Stream employees whose position contains ``substring``."""
        ...

    @abstractmethod
    def close(self) -> OperationResult:
        """Release the backend connection. Safe to call more than once."""
        ...
