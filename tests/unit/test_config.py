"""Unit tests for configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from record_store.infrastructure.config import (
    Config,
    ObservabilityConfig,
    StorageConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Defaults reproduce the demo's fixed database file."""
        config = Config()

        assert config.storage.database_path == Path("testdb.db")
        assert config.storage.timeout_seconds == 5.0
        assert config.observability.log_format == "console"
        assert config.observability.metrics_enabled is False
        assert config.observability.otel_endpoint is None

    def test_ensure_directories(self, temp_dir: Path) -> None:
        """ensure_directories creates the database file's parent directory."""
        config = Config(storage=StorageConfig(database_path=temp_dir / "nested" / "db.sqlite"))

        config.ensure_directories()

        assert (temp_dir / "nested").is_dir()
        assert not (temp_dir / "nested" / "db.sqlite").exists()

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
        """Nested settings can be overridden from the environment."""
        monkeypatch.setenv("RECORD_STORE_STORAGE__DATABASE_PATH", str(temp_dir / "env.db"))
        monkeypatch.setenv("RECORD_STORE_OBSERVABILITY__LOG_LEVEL", "DEBUG")

        config = Config()

        assert config.storage.database_path == temp_dir / "env.db"
        assert config.observability.log_level == "DEBUG"

    def test_invalid_timeout(self) -> None:
        """Negative lock timeouts are rejected."""
        with pytest.raises(ValueError):
            StorageConfig(timeout_seconds=-1.0)

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            ObservabilityConfig(log_level="VERBOSE")  # type: ignore[arg-type]


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(self) -> None:
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2
