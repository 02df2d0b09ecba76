"""
Runtime configuration for the Game Roster application.

Defaults live in ``constants``; any value can be overridden through
``GAMEROSTER_*`` environment variables or a ``.env`` file.
"""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_DATA_DIR, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_STARTER_SLOTS,
    MAX_STARTER_SLOTS, MIN_STARTER_SLOTS
)


class AppSettings(BaseSettings):
    """Application settings with safe local defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GAMEROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: str = Field(default=DEFAULT_DATA_DIR, description="Root directory of the JSON data store")
    host: str = Field(default=DEFAULT_HOST, description="Web server bind address")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Web server port")
    log_level: str = Field(default="INFO", description="Root logging level")
    default_starter_slots: int = Field(
        default=DEFAULT_STARTER_SLOTS,
        ge=MIN_STARTER_SLOTS,
        le=MAX_STARTER_SLOTS,
        description="Starter slots used when a new game roster is created",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> AppSettings:
    """Get the cached application settings."""
    return AppSettings()
