"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: a local SQLite file works out-of-the-box
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldguard.core.domain_types import Locale


class Settings(BaseSettings):
    """fieldguard settings from environment variables.

    The default database_url uses aiosqlite: install the `sqlite` extra
    (`pip install fieldguard[sqlite]`) or set DATABASE_URL to another driver,
    e.g. postgresql:// with the `postgres` extra.
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database used by exists/uq rules
    database_url: str = "sqlite+aiosqlite:///./fieldguard.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Messages
    validation_locale: Locale = Locale.FA

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
