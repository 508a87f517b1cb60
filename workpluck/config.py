"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Work store
    lease_ttl_seconds: int = 3600

    # Worker Configuration
    worker_base_url: str = "http://localhost:8080"
    worker_topics: list[str] = ["echo"]
    worker_poll_interval_seconds: float = 1.0
    worker_max_backoff_seconds: float = 30.0
    worker_request_timeout_seconds: float = 10.0

    # Observability
    otel_exporter_otlp_endpoint: str | None = None
    otel_console_export: bool = False
    otel_service_name: str = "workpluck"
    log_level: str = "INFO"
    log_format: str = "json"  # json or console


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
