"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5-mini"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    advice_language: str = "English"
    open_meteo_base_url: str = "https://api.open-meteo.com/v1"
    profile_dir: str = ".sun_planner"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    fallback_lat: float = 59.3293
    fallback_lon: float = 18.0686
    tick_interval_seconds: float = 1.0
    session_location_label: str = "My spot"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return True when Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)
