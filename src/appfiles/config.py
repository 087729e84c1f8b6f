"""Configuration management for the app files service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


class Settings(BaseSettings):
    """Centralised runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="APPFILES_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )

    # Identity
    app_name: str = Field(default="appfiles", description="Application folder name.")
    company_name: str = Field(default="appfiles", description="Company folder name.")
    root_dir: str = Field(
        default="",
        description="Existing directory holding company folders; empty selects the platform data directory.",
    )

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    log_level: str = Field(default="info")

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
