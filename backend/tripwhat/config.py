"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # LLM
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    intent_temperature: float = 0.3
    llm_max_tokens: int = 1000

    # Place resolver
    google_places_api_key: SecretStr | None = None
    places_base_url: str = "https://places.googleapis.com/v1"
    places_timeout_seconds: float = 10.0

    # Orchestrator deadline (seconds)
    request_timeout_seconds: float = 30.0

    # Intent detection
    intent_history_window: int = 3
    fallback_confidence: float = 0.6

    # Mutation engine
    find_and_add_limit: int = 3
    max_photos: int = 3

    # Static reference data override (defaults to the bundled catalog)
    categories_path: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
