"""Centralised environment-driven settings."""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings sourced from ``GRIDPATH_*`` environment variables."""

    LOG_LEVEL: str = "INFO"
    LOG_BUFFER: int = 500
    KERNELS_PATH: Optional[str] = None
    MAX_EXPANSIONS: Optional[int] = None

    model_config = SettingsConfigDict(
        env_prefix="GRIDPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["Settings", "settings"]
