"""Application settings.

Values come from environment variables prefixed with ``STOREFRONT_`` (or a
``.env`` file in the working directory). ``STOREFRONT_ENV`` selects the
environment overlay used by logging:

    - "development" → DEBUG, console renderer
    - "test"        → WARNING
    - "production"  → INFO, JSON renderer
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")

    env: str = "development"

    database_url: str = "sqlite:///storefront.db"
    database_pool_size: int = 10
    database_pool_timeout: int = 30
    database_echo: bool = False

    log_level: str | None = None
    log_dir: str | None = None

    cors_origins: list[str] = ["*"]

    # token -> "<user_id>:<role>", consumed by the static token auth provider
    auth_tokens: dict[str, str] = {}


@lru_cache
def get_settings() -> Settings:
    return Settings()
