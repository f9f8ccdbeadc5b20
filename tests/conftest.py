"""Pytest configuration and fixtures for kv_store tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from kv_store.application import KeyValueStore
from kv_store.infrastructure.config import Config, StorageConfig
from kv_store.infrastructure.container import Container
from kv_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture(autouse=True)
def reset_process_state() -> Generator[None, None, None]:
    """Reset the container and structlog configuration around each test."""
    Container.reset()
    yield
    Container.reset()
    structlog.reset_defaults()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir: Path) -> Path:
    """Path of a not-yet-created database file."""
    return temp_dir / "kv.sqlite"


@pytest.fixture
def test_config(db_path: Path) -> Config:
    """Provide a test configuration pointing at the temporary directory."""
    return Config(
        storage=StorageConfig(
            database_path=db_path,
            timeout_seconds=1.0,
            synchronous="off",  # Faster for tests
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def store(
    test_config: Config, metrics_registry: MetricsRegistry
) -> Generator[KeyValueStore, None, None]:
    """An open store on a fresh database file."""
    kv = KeyValueStore.open(config=test_config, metrics=metrics_registry)
    yield kv
    kv.close()


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
