"""Unit tests for configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from kv_store.infrastructure.config import (
    Config,
    ObservabilityConfig,
    StorageConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = Config()

        assert config.storage.database_path == Path("data/kv.sqlite")
        assert config.storage.timeout_seconds == 5.0
        assert config.storage.journal_mode == "delete"
        assert config.storage.synchronous == "full"
        assert config.observability.log_format == "json"
        assert config.observability.metrics_enabled is False
        assert config.observability.otel_endpoint is None

    def test_custom_storage_config(self, temp_dir: Path) -> None:
        """Test custom storage configuration."""
        storage = StorageConfig(
            database_path=temp_dir / "custom.sqlite",
            journal_mode="wal",
            synchronous="normal",
        )

        assert storage.database_path == temp_dir / "custom.sqlite"
        assert storage.journal_mode == "wal"
        assert storage.synchronous == "normal"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
        """Nested settings are read from prefixed environment variables."""
        monkeypatch.setenv("KV_STORE_STORAGE__DATABASE_PATH", str(temp_dir / "env.sqlite"))
        monkeypatch.setenv("KV_STORE_STORAGE__JOURNAL_MODE", "wal")
        monkeypatch.setenv("KV_STORE_OBSERVABILITY__LOG_LEVEL", "DEBUG")

        config = Config()

        assert config.storage.database_path == temp_dir / "env.sqlite"
        assert config.storage.journal_mode == "wal"
        assert config.observability.log_level == "DEBUG"

    def test_invalid_timeout(self) -> None:
        """Non-positive timeouts are rejected."""
        with pytest.raises(ValueError):
            StorageConfig(timeout_seconds=0)

    @pytest.mark.parametrize("mode", ["shadow", "memory", "off"])
    def test_invalid_journal_mode(self, mode: str) -> None:
        """Unknown modes and modes without an on-disk journal are rejected."""
        with pytest.raises(ValueError):
            StorageConfig(journal_mode=mode)  # type: ignore

    def test_invalid_metrics_port(self) -> None:
        with pytest.raises(ValueError):
            ObservabilityConfig(metrics_port=70000)


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(self) -> None:
        """Test that get_config returns the same instance."""
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2
