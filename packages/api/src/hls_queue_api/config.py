"""
App config from environment with defaults.
Uses pydantic-settings so all env vars are validated and documented in one model.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """
    Environment variables used by the HTTP surface.
    Env vars are read from os.environ (UPPER_SNAKE_CASE by default).
    """

    model_config = SettingsConfigDict(
        env_file=None,  # .env is loaded via bootstrap_env() so env is ready for all settings
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"


def get_settings() -> ApiSettings:
    """Return validated settings from current environment."""
    return ApiSettings()


def bootstrap_env() -> None:
    """
    Load .env from path in HLS_QUEUE_ENV_FILE if set.
    Call once at startup before reading settings so vars from the file are in os.environ.
    """
    import os

    import dotenv

    path = os.environ.get("HLS_QUEUE_ENV_FILE")
    if path:
        dotenv.load_dotenv(Path(path).resolve())
