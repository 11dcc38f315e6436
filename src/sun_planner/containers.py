"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from sun_planner.adapters.json_file_profile_store import JsonFileProfileStore
from sun_planner.adapters.open_meteo_client import OpenMeteoClient
from sun_planner.adapters.openai_json_client import OpenAIJsonClient
from sun_planner.adapters.supabase_profile_store import SupabaseProfileStore
from sun_planner.config import Settings
from sun_planner.domain.weather import GeoLocation
from sun_planner.services.advice import AdviceService
from sun_planner.services.beaches import BeachService
from sun_planner.services.playlist import PlaylistService
from sun_planner.services.profiles import (
    PreferencesService,
    ProfileService,
    ProfileStore,
)
from sun_planner.services.sun_timer import SunTimer
from sun_planner.services.ticker import AsyncioTicker
from sun_planner.services.weather import WeatherService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fallback_location: GeoLocation
    weather_service: WeatherService
    advice_service: AdviceService
    playlist_service: PlaylistService
    beach_service: BeachService
    profile_service: ProfileService
    preferences_service: PreferencesService
    sun_timer: SunTimer
    close_resources: Callable[[], Awaitable[None]]


def build_profile_store(settings: Settings) -> ProfileStore:
    """Pick Supabase when configured, otherwise local JSON files."""
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseProfileStore(client)
    return JsonFileProfileStore(Path(settings.profile_dir))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    profile_store = build_profile_store(resolved_settings)
    profile_service = ProfileService(profile_store)
    preferences_service = PreferencesService(profile_store)

    forecast_client = OpenMeteoClient.create(resolved_settings.open_meteo_base_url)
    weather_service = WeatherService(forecast_client)

    openai_client = OpenAIJsonClient.create(resolved_settings.openai_api_key)
    advice_service = AdviceService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        language=resolved_settings.advice_language,
    )
    playlist_service = PlaylistService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    beach_service = BeachService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        language=resolved_settings.advice_language,
    )
    ticker = AsyncioTicker(interval_seconds=resolved_settings.tick_interval_seconds)
    sun_timer = SunTimer(
        advice_provider=advice_service,
        session_recorder=profile_service,
        ticker=ticker,
        location_label=resolved_settings.session_location_label,
    )

    async def close_resources() -> None:
        await ticker.aclose()
        sun_timer.close()
        await forecast_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        fallback_location=GeoLocation(
            lat=resolved_settings.fallback_lat, lon=resolved_settings.fallback_lon
        ),
        weather_service=weather_service,
        advice_service=advice_service,
        playlist_service=playlist_service,
        beach_service=beach_service,
        profile_service=profile_service,
        preferences_service=preferences_service,
        sun_timer=sun_timer,
        close_resources=close_resources,
    )
