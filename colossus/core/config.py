"""
Package configuration using Pydantic Settings.

Loads process-level settings from environment variables (.env file).
Algorithm tuning does not live here: each metric takes its own config
object (``ReadinessConfig``, ``LoadRatioConfig``).
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "plain"] = "json"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
