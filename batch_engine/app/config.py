"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow"
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Database (strategies, batch progress, alerts)
    database_url: str = "sqlite:///./batch_engine.db"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Sentry
    sentry_dsn: Optional[str] = None

    # Environment
    environment: str = "development"

    # Application
    app_name: str = "Batch Cooking Strategy Engine"
    app_version: str = "1.0.0"
    debug: bool = False

    # Risk classification cache (pure function, safe to memoize)
    risk_cache_maxsize: int = 4096

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize log level names."""
        return str(v).upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
