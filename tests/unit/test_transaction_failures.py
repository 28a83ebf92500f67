"""Fault injection tests for commit, rollback, close and fetch failures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Sequence

import pytest

from record_store.adapters.inbound import describe_outcome
from record_store.adapters.outbound import SQLiteBackend
from record_store.application import TransactionalRecordStore
from record_store.domain.errors import ExecutionError, RollbackError
from record_store.domain.value_objects import ConnectionState, EmployeeId
from record_store.infrastructure.metrics import MetricsRegistry
from record_store.ports.outbound import BackendError


class FailingCursor:
    """Cursor that yields one row, then fails."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self.closed = False

    @property
    def rowcount(self) -> int:
        return self._inner.rowcount

    @property
    def lastrowid(self) -> int | None:
        return self._inner.lastrowid

    def __iter__(self) -> Iterator[Sequence[Any]]:
        for row in self._inner:
            yield row
            raise BackendError("database disk image is malformed")

    def close(self) -> None:
        self.closed = True
        self._inner.close()


class FaultyConnection:
    """Real SQLite connection with switchable faults."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self.fail_commit = False
        self.fail_rollback = False
        self.fail_close = False
        self.fail_fetch = False
        self.rollback_calls = 0
        self.cursors: list[FailingCursor] = []

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Any:
        cursor = self._inner.execute(sql, params)
        if self.fail_fetch and sql.startswith("SELECT"):
            cursor = FailingCursor(cursor)
            self.cursors.append(cursor)
        return cursor

    def commit(self) -> None:
        if self.fail_commit:
            raise BackendError("disk I/O error")
        self._inner.commit()

    def rollback(self) -> None:
        self.rollback_calls += 1
        if self.fail_rollback:
            raise BackendError("cannot rollback - no transaction is active")
        self._inner.rollback()

    def close(self) -> None:
        self._inner.close()
        if self.fail_close:
            raise BackendError("unable to close due to unfinalized statements")


class FaultyBackend:
    """Backend handing out FaultyConnection instances."""

    def __init__(self) -> None:
        self.connection: FaultyConnection | None = None

    def connect(self, database: str) -> FaultyConnection:
        self.connection = FaultyConnection(SQLiteBackend().connect(database))
        return self.connection


@pytest.mark.chaos
class TestTransactionFailures:
    """Store behavior when the backend misbehaves."""

    @pytest.fixture
    def backend(self) -> FaultyBackend:
        return FaultyBackend()

    @pytest.fixture
    def faulty_store(
        self, db_path: Path, backend: FaultyBackend, metrics_registry: MetricsRegistry
    ):
        store = TransactionalRecordStore(db_path, backend=backend, metrics=metrics_registry)
        store.initialize()
        assert store.ensure_schema().ok
        yield store
        store.close()

    def test_commit_failure_rolls_back(
        self, faulty_store: TransactionalRecordStore, backend: FaultyBackend
    ) -> None:
        backend.connection.fail_commit = True

        result = faulty_store.insert("Rinku Singh", "Software Developer", 85000.0)

        assert result.failed
        assert result.error.message == "disk I/O error"
        assert backend.connection.rollback_calls == 1

        backend.connection.fail_commit = False
        assert list(faulty_store.list_all()) == []

    def test_rollback_failure_is_reported_separately(
        self, faulty_store: TransactionalRecordStore, backend: FaultyBackend
    ) -> None:
        backend.connection.fail_rollback = True

        result = faulty_store.insert(None, "QA Engineer", 75000.0)  # type: ignore[arg-type]

        assert result.failed
        assert isinstance(result.error, ExecutionError)
        assert isinstance(result.error.rollback_error, RollbackError)
        assert "NOT NULL" in result.error.message
        assert faulty_store.get_stats()["rollback_failures"] == 1
        assert describe_outcome(result)[0] == (
            "Rollback failed: cannot rollback - no transaction is active"
        )

    def test_rollback_failure_does_not_stop_later_operations(
        self, faulty_store: TransactionalRecordStore, backend: FaultyBackend
    ) -> None:
        backend.connection.fail_rollback = True
        faulty_store.insert(None, "QA Engineer", 75000.0)  # type: ignore[arg-type]
        backend.connection.fail_rollback = False

        assert faulty_store.insert("Sai Gill", "Project Manager", 95000.0).ok
        assert faulty_store.delete(EmployeeId(1)).ok
        assert list(faulty_store.list_all()) == []

    def test_close_failure_is_not_fatal(
        self, faulty_store: TransactionalRecordStore, backend: FaultyBackend
    ) -> None:
        backend.connection.fail_close = True

        result = faulty_store.close()

        assert result.failed
        assert "unfinalized" in result.error.message
        assert faulty_store.state is ConnectionState.CLOSED
        assert faulty_store.close().ok

    def test_fetch_failure_mid_stream(
        self,
        faulty_store: TransactionalRecordStore,
        backend: FaultyBackend,
        metrics_registry: MetricsRegistry,
    ) -> None:
        faulty_store.insert("Rinku Singh", "Software Developer", 85000.0)
        faulty_store.insert("Sai Gill", "Project Manager", 95000.0)
        backend.connection.fail_fetch = True

        result = faulty_store.list_all()
        assert result.ok

        with pytest.raises(ExecutionError, match="malformed"):
            list(result)

        assert backend.connection.cursors[0].closed
        assert backend.connection.rollback_calls == 1
        assert faulty_store.get_stats()["failed_operations"] == 1
        assert metrics_registry.registry.get_sample_value(
            "record_store_operations_total", {"operation": "list_all", "status": "failed"}
        ) == 1.0

    def test_abandoned_stream_releases_cursor(
        self, faulty_store: TransactionalRecordStore, backend: FaultyBackend
    ) -> None:
        faulty_store.insert("Rinku Singh", "Software Developer", 85000.0)
        faulty_store.insert("Sai Gill", "Project Manager", 95000.0)
        backend.connection.fail_fetch = True

        with faulty_store.list_all() as result:
            first = next(iter(result))

        assert first.name == "Rinku Singh"
        assert backend.connection.cursors[0].closed
        assert backend.connection.rollback_calls == 0
