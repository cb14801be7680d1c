from __future__ import annotations

"""Configuration module for the daily report bot."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    bot_token: str
    db_path: Path = Path("./data/daily_reports.sqlite3")
    roster_path: Path = Path("./accounts.json")
    locale: str = "ru"
    reminder_interval_seconds: float = Field(default=60.0, gt=0)
    report_cooldown_hours: float = Field(default=23.0, ge=0)
    log_level: str = "INFO"


@lru_cache()
def load_settings() -> Settings:
    return Settings()
