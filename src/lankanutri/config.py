"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_storage_bucket: str | None = None
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    groq_api_key: str | None = None
    groq_model: str = "llama-3.3-70b-versatile"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    default_target_calories: int = 2000
    plate_target_ratio: float = 0.9
    plate_candidate_limit: int = 20
    plate_selection: str = "random"
    chat_history_limit: int = 20
    conversation_ttl_seconds: int = 86400
    shipping_price: float = 200.0
    max_upload_bytes: int = 5 * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def debug(self) -> bool:
        """Return true when error details may be exposed to clients."""
        return self.environment in {"local", "development"}


def missing_optional_keys(settings: Settings) -> list[str]:
    """Return the names of unset credentials for optional collaborators."""
    missing = []
    if not settings.openai_api_key:
        missing.append("OPENAI_API_KEY")
    if not settings.groq_api_key:
        missing.append("GROQ_API_KEY")
    if not settings.supabase_storage_bucket:
        missing.append("SUPABASE_STORAGE_BUCKET")
    return missing
