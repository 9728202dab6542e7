"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have defaults suitable for local development against SQLite.

    Environment Variables:
        DATABASE_URL: SQLAlchemy connection string
        DB_ISOLATION_LEVEL: Transaction isolation for the engine
        DB_CONNECT_TIMEOUT: Seconds to wait for a connection before failing
        AUTO_CREATE_SCHEMA: Create missing tables on startup
        ENV: development | production (production hides /docs)
        EXPOSE_ERROR_DETAILS: Include internal error text in 5xx envelopes
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        CORS_ORIGINS: Comma-separated list of allowed origins
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./emunicipality.db"
    DB_ISOLATION_LEVEL: str = "SERIALIZABLE"
    DB_CONNECT_TIMEOUT: int = 10
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5
    DB_ECHO: bool = False
    AUTO_CREATE_SCHEMA: bool = True

    # Application
    ENV: str = "development"
    DEBUG: bool = False
    EXPOSE_ERROR_DETAILS: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: str = "*"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def verbose_errors(self) -> bool:
        """Internal error text is only disclosed when explicitly configured."""
        return self.EXPOSE_ERROR_DETAILS or self.DEBUG

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
