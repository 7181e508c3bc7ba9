"""
Configuration management using Pydantic Settings.
All environment variables are loaded and validated here.
"""

from typing import List, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ================================
    # Application Configuration
    # ================================
    APP_NAME: str = "Deal Monitor"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production", "test"] = "development"
    DEBUG: bool = True

    # API Configuration
    API_PREFIX: str = "/api"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:8000"

    @field_validator("ALLOWED_ORIGINS")
    @classmethod
    def parse_origins(cls, v: str) -> List[str]:
        """Parse comma-separated origins into list."""
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    # ================================
    # Database Configuration
    # ================================
    # SQLite (aiosqlite) by default, PostgreSQL via postgresql+asyncpg://
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./data/deal_monitor.db",
        description="Async SQLAlchemy connection string",
    )
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # ================================
    # Query Defaults
    # ================================
    DEFAULT_SEARCH_LIMIT: int = Field(20, ge=1, le=100)

    # ================================
    # Logging Configuration
    # ================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.APP_ENV == "production"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")


# Global settings instance
settings = Settings()
