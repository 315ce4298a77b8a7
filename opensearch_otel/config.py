"""Instrumentation configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from opensearch_otel import __version__


class Settings(BaseSettings):
    """Settings loaded from OPENSEARCH_OTEL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OPENSEARCH_OTEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Instrumentation
    capture_search_body: bool = False  # Record search request bodies as db.statement
    instrumentation_version: str = __version__

    # Tracing
    tracing_enabled: bool = True
    service_name: str = "opensearch-client"
    service_version: str = __version__
    otlp_endpoint: str | None = None  # e.g. "http://localhost:4318"
    console_export: bool = False
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
