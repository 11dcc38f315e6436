"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from sun_planner.api.models import (
    CoordinatesRequest,
    OnboardingRequest,
    PlaylistRequest,
    SkinTypeRequest,
    ThemeRequest,
)
from sun_planner.app_logging import configure_logging
from sun_planner.containers import AppContainer
from sun_planner.domain.exposure import ExposureProfile, SkinType
from sun_planner.domain.profile import UserProfile
from sun_planner.domain.timer import TimerSnapshot
from sun_planner.domain.weather import GeoLocation, WeatherData
from sun_planner.services.advice import get_advice_or_fallback
from sun_planner.services.location import resolve_location
from sun_planner.services.weather import describe_weather_code


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    def _resolve(
        state_container: AppContainer, lat: float | None, lon: float | None
    ) -> GeoLocation:
        return resolve_location(lat, lon, fallback=state_container.fallback_location)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/skin-types")
    async def skin_types() -> dict[str, object]:
        """List skin categories from most to least sensitive."""
        return {
            "skin_types": [
                {
                    "value": skin_type.value,
                    "rank": skin_type.rank,
                    "description": skin_type.description,
                }
                for skin_type in SkinType
            ]
        }

    @app.get("/weather")
    async def weather(
        request: Request, lat: float | None = None, lon: float | None = None
    ) -> dict[str, object]:
        """Return current weather for the client location."""
        state_container = _container(request)
        location = _resolve(state_container, lat, lon)
        data = await state_container.weather_service.fetch(location.lat, location.lon)
        return {"location": asdict(location), "weather": _weather_payload(data)}

    @app.get("/advice")
    async def advice(
        request: Request, uv_index: float, skin_type: SkinType
    ) -> dict[str, object]:
        """Return exposure advice without touching the timer."""
        if uv_index < 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="uv_index must be non-negative",
            )
        result = await get_advice_or_fallback(
            _container(request).advice_service, uv_index, skin_type
        )
        return {"advice": result.model_dump()}

    @app.get("/timer")
    async def timer_state(request: Request) -> dict[str, object]:
        """Return the countdown state."""
        return _timer_payload(_container(request).sun_timer.snapshot())

    @app.post("/timer/advice")
    async def refresh_timer_advice(
        request: Request, body: CoordinatesRequest | None = None
    ) -> dict[str, object]:
        """Fetch weather and advice for the stored profile."""
        state_container = _container(request)
        profile = state_container.profile_service.current()
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Onboarding required",
            )
        coordinates = body or CoordinatesRequest()
        location = _resolve(state_container, coordinates.lat, coordinates.lon)
        data = await state_container.weather_service.fetch(location.lat, location.lon)
        exposure = ExposureProfile(uv_index=data.uv_index, skin_type=profile.skin_type)
        await state_container.sun_timer.request_advice(exposure)
        payload = _timer_payload(state_container.sun_timer.snapshot())
        payload["weather"] = _weather_payload(data)
        return payload

    @app.post("/timer/start")
    async def start_timer(request: Request) -> dict[str, object]:
        """Start or resume the countdown."""
        timer = _container(request).sun_timer
        if not timer.start():
            logger.info("Ignoring start in phase %s", timer.phase)
        return _timer_payload(timer.snapshot())

    @app.post("/timer/pause")
    async def pause_timer(request: Request) -> dict[str, object]:
        """Pause the countdown."""
        timer = _container(request).sun_timer
        timer.pause()
        return _timer_payload(timer.snapshot())

    @app.post("/timer/reset")
    async def reset_timer(request: Request) -> dict[str, object]:
        """Reset the countdown to its full length."""
        timer = _container(request).sun_timer
        timer.reset()
        return _timer_payload(timer.snapshot())

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the profile, or signal that onboarding is needed."""
        profile = _container(request).profile_service.current()
        if profile is None:
            return {"profile": None, "onboarding_required": True}
        return {"profile": _profile_payload(profile), "onboarding_required": False}

    @app.post("/profile/onboarding", status_code=status.HTTP_201_CREATED)
    async def onboarding(
        body: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Create the profile from the onboarding form."""
        try:
            profile = _container(request).profile_service.complete_onboarding(
                body.name, body.skin_type
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"profile": _profile_payload(profile)}

    @app.post("/profile/skip", status_code=status.HTTP_201_CREATED)
    async def skip_onboarding(request: Request) -> dict[str, object]:
        """Create the default profile."""
        profile = _container(request).profile_service.skip_onboarding()
        return {"profile": _profile_payload(profile)}

    @app.patch("/profile/skin-type")
    async def update_skin_type(
        body: SkinTypeRequest, request: Request
    ) -> dict[str, object]:
        """Change skin type and refresh advice for the last UV reading."""
        state_container = _container(request)
        profile = state_container.profile_service.update_skin_type(body.skin_type)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Onboarding required",
            )
        timer = state_container.sun_timer
        if timer.profile is not None:
            timer.schedule_advice(
                ExposureProfile(
                    uv_index=timer.profile.uv_index, skin_type=profile.skin_type
                )
            )
        return {"profile": _profile_payload(profile)}

    @app.delete("/profile")
    async def logout(request: Request) -> dict[str, str]:
        """Forget the stored profile."""
        _container(request).profile_service.logout()
        return {"status": "ok"}

    @app.get("/profile/history")
    async def history(request: Request) -> dict[str, object]:
        """Return completed sessions, newest first."""
        sessions = _container(request).profile_service.history()
        return {"history": [session.to_dict() for session in sessions]}

    @app.get("/preferences/theme")
    async def get_theme(request: Request) -> dict[str, str]:
        """Return the saved theme."""
        return {"theme": _container(request).preferences_service.get_theme().value}

    @app.put("/preferences/theme")
    async def set_theme(body: ThemeRequest, request: Request) -> dict[str, str]:
        """Save the theme."""
        theme = _container(request).preferences_service.set_theme(body.theme)
        return {"theme": theme.value}

    @app.post("/preferences/theme/toggle")
    async def toggle_theme(request: Request) -> dict[str, str]:
        """Switch between light and dark."""
        theme = _container(request).preferences_service.toggle_theme()
        return {"theme": theme.value}

    @app.post("/playlist")
    async def playlist(body: PlaylistRequest, request: Request) -> dict[str, object]:
        """Generate songs for a vibe."""
        songs = await _container(request).playlist_service.generate(body.vibe)
        return {"songs": [song.model_dump() for song in songs]}

    @app.get("/beaches")
    async def beaches(
        request: Request, lat: float | None = None, lon: float | None = None
    ) -> dict[str, object]:
        """Recommend sunbathing spots near the client location."""
        state_container = _container(request)
        location = _resolve(state_container, lat, lon)
        found = await state_container.beach_service.find_nearby(location)
        return {
            "location": asdict(location),
            "beaches": [beach.model_dump() for beach in found],
        }

    return app


def _timer_payload(snapshot: TimerSnapshot) -> dict[str, object]:
    return {
        "phase": snapshot.phase.value,
        "status": snapshot.status_label,
        "total_seconds": snapshot.total_seconds,
        "remaining_seconds": snapshot.remaining_seconds,
        "progress_percent": round(snapshot.progress_percent, 2),
        "display": snapshot.display,
        "loading_advice": snapshot.loading_advice,
        "advice": snapshot.advice.model_dump() if snapshot.advice else None,
    }


def _weather_payload(data: WeatherData) -> dict[str, object]:
    payload = asdict(data)
    payload["description"] = describe_weather_code(data.weather_code)
    return payload


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    payload = profile.to_dict()
    payload["skin_type_label"] = profile.skin_type.label
    payload["history"] = [session.to_dict() for session in reversed(profile.history)]
    return payload
