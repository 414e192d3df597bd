# Settings - process-wide configuration flags for the SDK.
# Created: 2026-02-11
#
# Values come from JIVE_* environment variables or a .env file, e.g.
#   JIVE_DEVELOPMENT=true
#   JIVE_CLIENT_ID=...
#   JIVE_CLIENT_SECRET=...

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SDK settings."""

    model_config = SettingsConfigDict(
        env_prefix="JIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Accept registration requests without signature validation
    development: bool = False

    # Fallback add-on credentials when a registration block omits them
    client_id: str | None = None
    client_secret: str | None = None

    config_dir: Path = Field(default_factory=lambda: Path.home() / ".jive-sdk")
    http_timeout: float = 15.0
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()


def get_config_dir(settings: Settings | None = None) -> Path:
    """Get/create the SDK data directory."""
    d = (settings or get_settings()).config_dir
    d.mkdir(parents=True, exist_ok=True)
    return d
