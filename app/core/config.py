"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

import os
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    # Database (SQLite by default, any SQLAlchemy URL works - e.g. PostgreSQL)
    database_url: str = "sqlite:///./placement.db"
    sql_echo: bool = False

    # Seed data (students.json / companies.json) loaded into empty tables
    seed_data_dir: str = os.path.join(PACKAGE_ROOT, "data")
    seed_on_startup: bool = True

    # HTTP
    cors_origins: List[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
