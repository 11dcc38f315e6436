"""Weather and location domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoLocation:
    """A latitude/longitude pair."""

    lat: float
    lon: float


@dataclass(frozen=True)
class DailyForecast:
    """Parallel daily forecast series as returned by Open-Meteo."""

    time: list[str]
    weather_code: list[int]
    max_temp: list[float]
    min_temp: list[float]


@dataclass(frozen=True)
class WeatherData:
    """Current conditions with an optional daily forecast."""

    temperature: float
    uv_index: float
    weather_code: int
    daily: DailyForecast | None = None


DEFAULT_WEATHER = WeatherData(temperature=20, uv_index=5, weather_code=0)
