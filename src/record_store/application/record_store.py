"""Transactional Record Store - the façade over the employees table.

Every operation runs as exactly one statement inside its own transaction:

    execute ──ok──> commit ──> OperationResult(OK | NOT_FOUND)
       │
     error
       │
       v
    rollback ──ok──────> OperationResult(FAILED, error)
       │
     error
       │
       v
    OperationResult(FAILED, error with rollback_error attached)

Auto-commit is disabled when the connection is opened, so nothing a
statement does is visible to other connections until its commit.

Usage:
    from record_store.application import TransactionalRecordStore

    with TransactionalRecordStore("employees.db") as store:
        store.ensure_schema()
        store.insert("Rinku Singh", "Software Developer", 85000.0)
        for employee in store.list_all():
            print(employee)
"""

from __future__ import annotations

import time
from contextlib import closing
from pathlib import Path
from typing import Any, Iterator, Sequence

from record_store.adapters.outbound import SQLiteBackend
from record_store.domain.entities import Employee
from record_store.domain.errors import (
    DatabaseConnectionError,
    ExecutionError,
    RollbackError,
    SchemaError,
)
from record_store.domain.value_objects import (
    ConnectionState,
    EmployeeId,
    OperationResult,
    OperationStatus,
    QueryResult,
)
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.infrastructure.tracing import trace_span
from record_store.ports.outbound import (
    BackendConnection,
    BackendCursor,
    BackendError,
    DatabaseBackend,
)


logger = get_logger(__name__)


CREATE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS employees ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "name TEXT NOT NULL, "
    "position TEXT NOT NULL, "
    "salary REAL"
    ")"
)
INSERT_SQL = "INSERT INTO employees (name, position, salary) VALUES (?, ?, ?)"
UPDATE_SALARY_SQL = "UPDATE employees SET salary = ? WHERE id = ?"
DELETE_SQL = "DELETE FROM employees WHERE id = ?"
SELECT_ALL_SQL = "SELECT id, name, position, salary FROM employees"
SELECT_BY_POSITION_SQL = SELECT_ALL_SQL + " WHERE position LIKE ?"


class TransactionalRecordStore:
    """Atomic, parameterized CRUD access to the employees table.

    The store owns a single backend connection for its whole lifetime:
    UNINITIALIZED until ``initialize()``, OPEN until ``close()``, then
    CLOSED for good.

    Only ``initialize()`` raises. Every other operation reports its outcome
    as a value, and a statement that matched no rows is reported as
    ``OperationStatus.NOT_FOUND`` rather than as a failure.

    Thread Safety:
        None. One caller issues one operation at a time.
    """

    def __init__(
        self,
        database: str | Path,
        backend: DatabaseBackend | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the store without opening a connection.

        Args:
            database: Database file path (or ``":memory:"``).
            backend: Backend used to open the connection (SQLite by default).
            metrics: Metrics registry (the process-wide one by default).
        """
        self._database = str(database)
        self._backend = backend or SQLiteBackend()
        self._metrics = metrics or get_metrics()
        self._connection: BackendConnection | None = None
        self._state = ConnectionState.UNINITIALIZED

        self._commits = 0
        self._rollbacks = 0
        self._rollback_failures = 0
        self._failed_operations = 0

    @property
    def database(self) -> str:
        return self._database

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.OPEN

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(self) -> None:
        """Open the backend connection with auto-commit disabled.

        Calling it again while open does nothing.

        Raises:
            DatabaseConnectionError: If the driver is unavailable, the
                database cannot be opened, or the store is already closed.
        """
        if self._state is ConnectionState.OPEN:
            return
        if self._state is ConnectionState.CLOSED:
            raise DatabaseConnectionError("Store is closed and cannot be reopened")

        with trace_span("record_store.initialize", {"db.name": self._database}):
            try:
                self._connection = self._backend.connect(self._database)
            except BackendError as e:
                logger.error(
                    "database_connection_failed", database=self._database, error=str(e)
                )
                raise DatabaseConnectionError(str(e), cause=e) from e

        self._state = ConnectionState.OPEN
        self._metrics.connection_open.set(1)
        logger.info("database_connection_established", database=self._database)

    def close(self) -> OperationResult:
        """Release the backend connection.

        Safe to call when never opened or already closed. A failing release
        is reported in the result; the store ends up CLOSED either way.
        """
        if self._state is not ConnectionState.OPEN:
            self._state = ConnectionState.CLOSED
            return OperationResult.completed("close", 0)

        started = time.perf_counter()
        connection = self._connection
        self._connection = None
        self._state = ConnectionState.CLOSED
        self._metrics.connection_open.set(0)

        with trace_span("record_store.close", {"db.name": self._database}):
            try:
                connection.close()
            except BackendError as e:
                result = OperationResult.failure("close", ExecutionError(str(e), cause=e))
            else:
                result = OperationResult.completed("close", 0)

        self._observe(result, started)
        return result

    def __enter__(self) -> TransactionalRecordStore:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Mutating operations
    # -------------------------------------------------------------------------

    def ensure_schema(self) -> OperationResult:
        """Create the employees table if it does not exist yet."""
        return self._execute_write("ensure_schema", CREATE_TABLE_SQL, error_type=SchemaError)

    def insert(self, name: str, position: str, salary: float | None) -> OperationResult:
        """Insert one employee.

        Returns:
            Result with ``rows_affected`` (1) and the backend-assigned id in
            ``last_row_id``. A NOT NULL violation yields a FAILED result and
            leaves no row behind.
        """
        return self._execute_write(
            "insert", INSERT_SQL, (name, position, salary), capture_row_id=True
        )

    def update_salary(self, employee_id: EmployeeId, new_salary: float) -> OperationResult:
        """Set one employee's salary; NOT_FOUND when no row has that id."""
        return self._execute_write(
            "update_salary",
            UPDATE_SALARY_SQL,
            (new_salary, employee_id),
            employee_id=employee_id,
            zero_is_not_found=True,
        )

    def delete(self, employee_id: EmployeeId) -> OperationResult:
        """Delete one employee; NOT_FOUND when no row has that id."""
        return self._execute_write(
            "delete",
            DELETE_SQL,
            (employee_id,),
            employee_id=employee_id,
            zero_is_not_found=True,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_all(self) -> QueryResult:
        """Stream every employee in backend order (insertion order here)."""
        return self._execute_query("list_all", SELECT_ALL_SQL)

    def find_by_position(self, substring: str) -> QueryResult:
        """Stream employees whose position contains ``substring``.

        The substring is bound as the LIKE pattern ``%substring%``; any
        ``%`` or ``_`` it contains act as wildcards. SQLite matches ASCII
        letters case-insensitively.
        """
        return self._execute_query(
            "find_by_position", SELECT_BY_POSITION_SQL, (f"%{substring}%",)
        )

    def get_stats(self) -> dict[str, Any]:
        """Get transaction statistics for this store."""
        return {
            "database": self._database,
            "state": self._state.name,
            "commits": self._commits,
            "rollbacks": self._rollbacks,
            "rollback_failures": self._rollback_failures,
            "failed_operations": self._failed_operations,
        }

    # -------------------------------------------------------------------------
    # Transaction bracketing
    # -------------------------------------------------------------------------

    def _execute_write(
        self,
        operation: str,
        sql: str,
        params: Sequence[Any] = (),
        *,
        error_type: type[ExecutionError] | type[SchemaError] = ExecutionError,
        employee_id: int | None = None,
        zero_is_not_found: bool = False,
        capture_row_id: bool = False,
    ) -> OperationResult:
        """Run one statement in its own transaction and commit it."""
        started = time.perf_counter()
        if self._connection is None:
            result = OperationResult.failure(
                operation, error_type("Database connection is not open"), employee_id
            )
            self._observe(result, started)
            return result

        with trace_span(f"record_store.{operation}", {"db.statement": sql}) as span:
            try:
                with closing(self._connection.execute(sql, params)) as cursor:
                    rows_affected = max(cursor.rowcount, 0)
                    last_row_id = cursor.lastrowid if capture_row_id else None
                self._connection.commit()
            except BackendError as e:
                rollback_error = self._rollback(operation)
                error = error_type(str(e), cause=e, rollback_error=rollback_error)
                result = OperationResult.failure(operation, error, employee_id)
            else:
                self._commits += 1
                self._metrics.transactions_total.labels(outcome="commit").inc()
                result = OperationResult.completed(
                    operation,
                    rows_affected,
                    last_row_id=last_row_id,
                    employee_id=employee_id,
                    zero_is_not_found=zero_is_not_found,
                )
            span.set_attribute("record_store.status", result.status.value)

        self._observe(result, started)
        return result

    def _execute_query(
        self, operation: str, sql: str, params: Sequence[Any] = ()
    ) -> QueryResult:
        """Execute a select and hand back a lazy stream over its cursor."""
        started = time.perf_counter()
        if self._connection is None:
            error = ExecutionError("Database connection is not open")
            self._observe(OperationResult.failure(operation, error), started)
            return QueryResult.failure(operation, error)

        with trace_span(f"record_store.{operation}", {"db.statement": sql}):
            try:
                cursor = self._connection.execute(sql, params)
            except BackendError as e:
                rollback_error = self._rollback(operation)
                error = ExecutionError(str(e), cause=e, rollback_error=rollback_error)
                self._observe(OperationResult.failure(operation, error), started)
                return QueryResult.failure(operation, error)

        self._observe(OperationResult.completed(operation, 0), started)
        return QueryResult(operation, self._stream(operation, cursor))

    def _stream(self, operation: str, cursor: BackendCursor) -> Iterator[Employee]:
        """Yield employees from ``cursor``, closing it on every exit path.

        Raises:
            ExecutionError: If a row cannot be fetched mid-stream.
        """
        try:
            with closing(cursor):
                for row in cursor:
                    yield Employee.from_row(row)
        except BackendError as e:
            rollback_error = self._rollback(operation)
            self._failed_operations += 1
            self._metrics.operations_total.labels(operation=operation, status="failed").inc()
            logger.error("query_stream_failed", operation=operation, error=str(e))
            raise ExecutionError(str(e), cause=e, rollback_error=rollback_error) from e

    def _rollback(self, operation: str) -> RollbackError | None:
        """Roll back the current transaction; return the failure, if any."""
        if self._connection is None:
            self._rollback_failures += 1
            return RollbackError("Database connection is not open")
        try:
            self._connection.rollback()
        except BackendError as e:
            self._rollback_failures += 1
            self._metrics.transactions_total.labels(outcome="rollback_failed").inc()
            logger.error("transaction_rollback_failed", operation=operation, error=str(e))
            return RollbackError(str(e), cause=e)
        self._rollbacks += 1
        self._metrics.transactions_total.labels(outcome="rollback").inc()
        logger.warning("transaction_rolled_back", operation=operation)
        return None

    def _observe(self, result: OperationResult, started: float) -> None:
        """Record metrics and a log event for a finished operation."""
        elapsed = time.perf_counter() - started
        self._metrics.operations_total.labels(
            operation=result.operation, status=result.status.value
        ).inc()
        self._metrics.operation_latency_seconds.labels(operation=result.operation).observe(
            elapsed
        )

        if result.status is OperationStatus.FAILED:
            self._failed_operations += 1
            logger.error(
                "operation_failed",
                operation=result.operation,
                error=result.error.message if result.error else None,
            )
        elif result.status is OperationStatus.NOT_FOUND:
            logger.info(
                "employee_not_found", operation=result.operation, employee_id=result.employee_id
            )
        else:
            logger.info(
                "operation_completed",
                operation=result.operation,
                rows_affected=result.rows_affected,
            )
