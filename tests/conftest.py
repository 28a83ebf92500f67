"""Pytest configuration and fixtures for record_store tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from record_store.application import TransactionalRecordStore
from record_store.infrastructure.config import Config, ObservabilityConfig, StorageConfig
from record_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir: Path) -> Path:
    """Path of a database file that does not exist yet."""
    return temp_dir / "employees.db"


@pytest.fixture
def test_config(db_path: Path) -> Config:
    """Provide a test configuration pointing at the temporary database."""
    return Config(
        storage=StorageConfig(database_path=db_path, timeout_seconds=1.0),
        observability=ObservabilityConfig(log_level="WARNING"),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def store(
    db_path: Path, metrics_registry: MetricsRegistry
) -> Generator[TransactionalRecordStore, None, None]:
    """An initialized store with the employees table in place."""
    s = TransactionalRecordStore(db_path, metrics=metrics_registry)
    s.initialize()
    assert s.ensure_schema().ok
    yield s
    s.close()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "chaos: Chaos/fault injection tests")
