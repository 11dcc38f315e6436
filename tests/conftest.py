"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from sun_planner.adapters.open_meteo_client import ForecastClient
from sun_planner.config import Settings
from sun_planner.containers import AppContainer
from sun_planner.domain.exposure import SkinType, SunAdvice
from sun_planner.domain.profile import SunSession
from sun_planner.domain.weather import GeoLocation
from sun_planner.services.advice import AdviceProvider, AdviceService
from sun_planner.services.beaches import BeachService
from sun_planner.services.generation import JsonGenerationClient
from sun_planner.services.playlist import PlaylistService
from sun_planner.services.profiles import (
    PreferencesService,
    ProfileService,
    ProfileStore,
    SessionRecorder,
)
from sun_planner.services.sun_timer import SunTimer
from sun_planner.services.weather import WeatherService

FORECAST_PAYLOAD: dict[str, object] = {
    "current": {"temperature_2m": 24.5, "weather_code": 1, "uv_index": 7.2},
    "daily": {
        "time": ["2026-07-01", "2026-07-02"],
        "weather_code": [1, 3],
        "temperature_2m_max": [26.0, 22.5],
        "temperature_2m_min": [15.0, 14.0],
    },
}


@dataclass
class InMemoryProfileStore(ProfileStore):
    """In-memory blob store for tests."""

    blobs: dict[str, str] = field(default_factory=dict)

    def load(self, key: str) -> str | None:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.blobs[key] = blob

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)


@dataclass
class ReadOnlyAfterSetupStore(InMemoryProfileStore):
    """Store whose writes start failing once read_only is set."""

    read_only: bool = False

    def save(self, key: str, blob: str) -> None:
        if self.read_only:
            raise OSError("read-only file system")
        super().save(key, blob)


@dataclass
class FakeJsonClient(JsonGenerationClient):
    """Fake structured-output client returning payloads by schema name."""

    payloads: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "sun_advice": {
                "safe_minutes": 20,
                "spf_recommendation": 30,
                "advice": "Use SPF 30 and seek shade at noon.",
            },
            "playlist": {
                "songs": [
                    {"title": "Walking on Sunshine", "artist": "Katrina", "vibe": "sun"}
                ]
            },
            "nearby_beaches": {
                "beaches": [
                    {
                        "name": "Långholmen",
                        "lat": 59.3206,
                        "lon": 18.0263,
                        "description": "Rocky beach in the city",
                    }
                ]
            },
        }
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payloads[schema_name]


@dataclass
class FakeForecastClient(ForecastClient):
    """Fake forecast client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=lambda: dict(FORECAST_PAYLOAD))
    error: Exception | None = None
    calls: list[tuple[float, float]] = field(default_factory=list)

    async def fetch_forecast(self, lat: float, lon: float) -> dict[str, object]:
        self.calls.append((lat, lon))
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class StaticAdviceProvider(AdviceProvider):
    """Advice provider returning queued results or raising."""

    results: list[SunAdvice | Exception] = field(default_factory=list)
    calls: list[tuple[float, SkinType]] = field(default_factory=list)

    async def get_advice(self, uv_index: float, skin_type: SkinType) -> SunAdvice:
        self.calls.append((uv_index, skin_type))
        result = self.results.pop(0) if self.results else advice(20)
        if isinstance(result, Exception):
            raise result
        return result


@dataclass
class RecordingSessionRecorder(SessionRecorder):
    """Session recorder that keeps sessions in a list."""

    sessions: list[SunSession] = field(default_factory=list)

    def record(self, session: SunSession) -> None:
        self.sessions.append(session)


@dataclass
class FakeTicker:
    """Ticker that records start/stop calls and ticks on demand."""

    starts: int = 0
    stops: int = 0
    callback: Callable[[], None] | None = None

    @property
    def running(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        if self.running:
            return
        self.starts += 1
        self.callback = callback

    def stop(self) -> None:
        if self.callback is not None:
            self.stops += 1
        self.callback = None

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self.callback is None:
                return
            self.callback()


def advice(safe_minutes: int, spf: int = 30, message: str = "Be careful") -> SunAdvice:
    return SunAdvice(
        safe_minutes=safe_minutes, spf_recommendation=spf, message=message
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        profile_dir=str(tmp_path / "profiles"),
    )


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def json_client() -> FakeJsonClient:
    return FakeJsonClient()


@pytest.fixture
def forecast_client() -> FakeForecastClient:
    return FakeForecastClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_store: InMemoryProfileStore,
    json_client: FakeJsonClient,
    forecast_client: FakeForecastClient,
) -> AppContainer:
    profile_service = ProfileService(profile_store)
    advice_service = AdviceService(
        client=json_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    sun_timer = SunTimer(
        advice_provider=advice_service,
        session_recorder=profile_service,
    )

    async def close_resources() -> None:
        sun_timer.close()

    return AppContainer(
        settings=settings,
        fallback_location=GeoLocation(lat=59.3293, lon=18.0686),
        weather_service=WeatherService(forecast_client),
        advice_service=advice_service,
        playlist_service=PlaylistService(
            client=json_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        beach_service=BeachService(
            client=json_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        profile_service=profile_service,
        preferences_service=PreferencesService(profile_store),
        sun_timer=sun_timer,
        close_resources=close_resources,
    )
