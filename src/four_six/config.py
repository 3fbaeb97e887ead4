"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    recipes_path: Path = Path("data/favorite_recipes.json")
    recipes_storage_key: str = "kasuya_favorite_recipes"
    sound_enabled: bool = True
    tone_output: Literal["subprocess", "log"] = "subprocess"
    tone_command: str = "play"
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    max_timer_sessions: int = Field(default=32, gt=0)
    timer_idle_timeout_seconds: float = Field(default=3600.0, gt=0)
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
