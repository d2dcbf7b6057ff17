"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from inventory_gateway.core.constants import (
    DEFAULT_POPULAR_PRODUCTS_LIMIT,
    HTTP_INTERNAL_SERVER_ERROR,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    database_url: str = Field(default="sqlite+aiosqlite:///./data/inventory.db")
    popular_products_limit: int = Field(default=DEFAULT_POPULAR_PRODUCTS_LIMIT, ge=1)
    backend_error_status: int = Field(default=HTTP_INTERNAL_SERVER_ERROR, ge=400, le=599)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the level against the names `logging` knows."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
