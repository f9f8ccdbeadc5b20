"""Configuration management for the key-value store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Backing file and storage engine configuration."""

    database_path: Path = Field(
        default=Path("data/kv.sqlite"), description="Path of the backing database file"
    )
    timeout_seconds: float = Field(
        default=5.0, gt=0, description="Seconds to wait on a locked database file"
    )
    journal_mode: Literal["delete", "truncate", "persist", "wal"] = Field(
        default="delete", description="Engine rollback journal mode"
    )
    synchronous: Literal["off", "normal", "full", "extra"] = Field(
        default="full", description="Engine fsync discipline"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    metrics_enabled: bool = Field(default=False, description="Expose Prometheus metrics")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="kv_store", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the key-value store."""

    model_config = SettingsConfigDict(
        env_prefix="KV_STORE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
