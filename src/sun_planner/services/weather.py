"""Weather lookups with a fixed fallback."""

import logging
from dataclasses import dataclass

from sun_planner.adapters.open_meteo_client import ForecastClient
from sun_planner.domain.weather import DEFAULT_WEATHER, DailyForecast, WeatherData

_logger = logging.getLogger(__name__)

_WEATHER_CODE_GROUPS: list[tuple[set[int], str]] = [
    ({0}, "Clear sky"),
    ({1, 2}, "Partly cloudy"),
    ({3}, "Overcast"),
    ({45, 48}, "Fog"),
    ({51, 53, 55, 56, 57}, "Drizzle"),
    ({61, 63, 65, 66, 67, 80, 81, 82}, "Rain"),
    ({71, 73, 75, 77, 85, 86}, "Snow"),
    ({95, 96, 99}, "Thunderstorm"),
]


@dataclass
class WeatherService:
    """Service returning current weather, never raising."""

    client: ForecastClient

    async def fetch(self, lat: float, lon: float) -> WeatherData:
        """Return weather for a coordinate or the default on any failure."""
        try:
            payload = await self.client.fetch_forecast(lat, lon)
            return _parse_forecast(payload)
        except Exception:
            _logger.exception("Weather fetch failed for lat=%s lon=%s", lat, lon)
            return DEFAULT_WEATHER


def describe_weather_code(code: int) -> str:
    """Map a WMO weather code to a short description."""
    for codes, description in _WEATHER_CODE_GROUPS:
        if code in codes:
            return description
    return "Unknown"


def _parse_forecast(payload: dict[str, object]) -> WeatherData:
    current = payload["current"]
    if not isinstance(current, dict):
        raise ValueError("Forecast payload is missing current conditions")
    uv_index = current.get("uv_index")
    return WeatherData(
        temperature=float(current["temperature_2m"]),
        uv_index=max(float(uv_index), 0.0) if uv_index is not None else 0.0,
        weather_code=int(current["weather_code"]),
        daily=_parse_daily(payload.get("daily")),
    )


def _parse_daily(daily: object) -> DailyForecast | None:
    if not isinstance(daily, dict):
        return None
    return DailyForecast(
        time=list(daily.get("time", [])),
        weather_code=[int(code) for code in daily.get("weather_code", [])],
        max_temp=[float(value) for value in daily.get("temperature_2m_max", [])],
        min_temp=[float(value) for value in daily.get("temperature_2m_min", [])],
    )
