"""Lightweight configuration for the Bio Commander engine."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, overridable through ``BIOCOMMANDER_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="BIOCOMMANDER_"
    )

    data_dir: Path = Field(default=Path("games"), description="Where game snapshots live")
    rules_version: str = Field(default="1.0", description="Ruleset version stamped on saves")
    history_limit: int = Field(
        default=100,
        description="How many accepted actions a session can undo",
        ge=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
