"""
Application configuration using Pydantic Settings.
Loads configuration from environment variables.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "Sur Innova Logistica API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Remote data service (PostgREST + GoTrue compatible)
    DATA_SERVICE_URL: str = ""
    DATA_SERVICE_ANON_KEY: str = ""
    DATA_SERVICE_SERVICE_KEY: str = ""
    DATA_SERVICE_TIMEOUT_SECONDS: float = 15.0

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Business Rules
    LOW_STOCK_THRESHOLD: int = 10
    RECENT_MOVEMENTS_LIMIT: int = 10
    COMPENSATE_FAILED_REGISTRATION: bool = False
    LOCAL_TIMEZONE: str = "America/Santiago"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v


# Global settings instance
settings = Settings()
