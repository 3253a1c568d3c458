"""
Settings aggregate.

One Settings object per process: host options from BaseSettings plus the
database and engine sections, each reading its own env prefix.

Dependencies: pydantic, pydantic_settings
System role: Central configuration entry point
"""

from functools import lru_cache

from pydantic import Field

from meetup.configs.base import BaseSettings
from meetup.configs.database import DatabaseSettings
from meetup.configs.engine import EngineSettings


class Settings(BaseSettings):
    """All Meetup Sync configuration."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once and reuse them.

    Tests that change environment variables call get_settings.cache_clear().
    """
    return Settings()
