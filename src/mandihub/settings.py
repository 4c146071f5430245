"""
mandihub.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for both stores and the API.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MANDIHUB_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "mandihub"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Relational backend (served under the `mysql` path segment).
    database_url: str = "sqlite+aiosqlite:///./mandihub.db"

    # Document backend (served under the `mongo` path segment).
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "mandihub"
    mongodb_server_selection_timeout_ms: int = 5000

    # Wipe and repopulate both stores with fixture data at startup.
    seed_on_startup: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Both store URLs live here so tests can point the app at throwaway instances.
