"""Value objects for the record store."""

from record_store.domain.value_objects.identifiers import ConnectionState, EmployeeId
from record_store.domain.value_objects.outcomes import (
    OperationResult,
    OperationStatus,
    QueryResult,
)

__all__ = [
    "ConnectionState",
    "EmployeeId",
    "OperationResult",
    "OperationStatus",
    "QueryResult",
]
