# backend/app/core/config.py
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_ROOT = Path(__file__).resolve().parents[2]
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and backend/.env."""

    environment: str = Field(default="development")
    api_title: str = Field(default="Trainer Booking API")
    api_version: str = Field(default="1.0.0")

    # Database
    database_url: str = Field(default="sqlite:///./trainer_booking.db")
    db_pool_size: int = Field(default=10, ge=1)
    db_max_overflow: int = Field(default=20, ge=0)
    db_pool_timeout: int = Field(default=30, ge=1)
    db_echo: bool = Field(default=False)

    # Logging / monitoring
    log_level: str = Field(default="INFO")
    metrics_enabled: bool = Field(default=True)

    # Pagination
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Leave policy: leave days allowed per trainer per calendar month
    leave_days_per_month: int = Field(default=1, ge=0)

    model_config = SettingsConfigDict(
        env_file=_BACKEND_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = (value or "INFO").strip().upper()
        if normalized not in _LOG_LEVELS:
            logger.warning("Unknown log_level=%s; defaulting to INFO", value)
            return "INFO"
        return normalized

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
