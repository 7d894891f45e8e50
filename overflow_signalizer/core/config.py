"""Signalizer configuration powered by Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Strongly typed settings shared by the CLI and the HTTP service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: Literal["dev", "staging", "prod"] = Field(default="dev")
    project_name: str = Field(default="Overflow Signalizer")
    version: str = Field(default="0.1.0")

    database_url: str = Field(default="sqlite:///./data/app.db")
    # "package.module:Base" or "package.module:Model" import targets
    models: list[str] = Field(default_factory=list)

    horizon_days: int = Field(default=60, ge=0)
    default_daily_rate: int = Field(default=100_000, ge=1)
    rate_window_days: int = Field(default=7, ge=1)

    signalizer_webhook_url: str | None = Field(default=None, min_length=1)
    signalizer_timeout: float = Field(default=10.0, gt=0)

    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> AppSettings:
    """Provide a cached singleton settings instance."""

    return AppSettings()
