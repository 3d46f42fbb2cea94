"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Every tunable the catalog depends on (catalog size, timeout, retries,
      batch size, page size) is overridable from the environment
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults mirror the public PokeAPI limits so the service works out-of-the-box
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Upstream
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    user_agent: str = "pokedex-catalog/1.0"

    @field_validator("pokeapi_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Resilience
    fetch_timeout_seconds: float = Field(10.0, gt=0)
    max_retries: int = Field(2, ge=0)
    retry_base_delay_ms: int = Field(1000, ge=0)

    # Catalog sizing (total Pokemon through generation 9)
    pokemon_limit: int = Field(1025, ge=1)
    max_fetch: int = Field(500, ge=1)
    batch_size: int = Field(20, ge=1)
    page_size: int = Field(50, ge=1)
    generation_limit: int = 9
    type_limit: int = 20

    # Transient in-memory caches
    cache_ttl_seconds: int = 86_400

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
