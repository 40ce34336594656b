"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # External REST API (owns all data)
    api_base_url: str = "http://localhost:3000"
    api_key: str = ""
    request_timeout_seconds: float = 15.0

    # Local storage for the cached token + user profile
    session_file: str = ".jobboard/session.json"

    # App
    debug: bool = False

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
