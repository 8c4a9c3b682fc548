"""
Application settings

Read from environment variables (or a local .env file). Defaults match a
local MongoDB on the standard port, so the API runs out of the box.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # HTTP
    port: int = 5001
    cors_origins: List[str] = ["*"]

    # Database
    database_url: str = "mongodb://127.0.0.1:27017"
    database_name: str = "boutique-jeux"
    database_timeout_ms: int = 5000

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
