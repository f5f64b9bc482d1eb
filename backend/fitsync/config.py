"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Postgres URLs are rewritten to the asyncpg driver
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://fitsync:fitsync@db:5432/fitsync"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = 7
    bcrypt_rounds: int = 12

    # Anthropic
    anthropic_api_key: str = "sk-ant-placeholder"
    anthropic_max_retries: int = 2
    anthropic_timeout_seconds: int = 60
    anthropic_base_delay_ms: int = 1000
    anthropic_max_delay_ms: int = 20_000

    # Suggestions
    llm_model: str = "claude-3-5-haiku-latest"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 1024

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
