"""Configuration management."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Anthropic (preferred provider for recommendations)
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = Field(default="claude-sonnet-4-20250514")

    # OpenAI (fallback provider)
    openai_api_key: Optional[str] = None
    openai_model: str = Field(default="gpt-4o")

    # Analysis tuning
    low_sleep_hours: float = Field(default=6.0)
    recent_window: int = Field(default=3, ge=1)

    # Data storage
    data_dir: Path = Field(default=Path("data"))

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080)
    log_level: str = Field(default="INFO")

    @property
    def has_claude(self) -> bool:
        return self.anthropic_api_key is not None

    @property
    def has_openai(self) -> bool:
        return self.openai_api_key is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once for the CLI and the web server."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
