# locallibrary/config.py
"""
Settings for the Local Library catalog.

Values come from environment variables prefixed with ``LOCALLIBRARY_``
(or a ``.env`` file in the working directory). Everything has a
development-friendly default, so the app starts without any
configuration at all.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    APP_TITLE: str = Field(
        default="Local Library",
        description="Title shown in page headers and the OpenAPI docs",
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment",
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level (ignored when DEBUG is true)",
    )

    # Optional JSON file with {"authors": [...], "genres": [...], "books": [...]}
    SEED_FILE: Optional[Path] = Field(
        default=None,
        description="JSON file used to populate the store at startup",
    )

    API_HOST: str = Field(default="127.0.0.1")
    API_PORT: int = Field(default=8000, ge=1, le=65535)

    model_config = SettingsConfigDict(
        env_prefix="LOCALLIBRARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance (parsed once per process)."""
    return Settings()
