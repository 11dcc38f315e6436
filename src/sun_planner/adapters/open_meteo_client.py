"""Open-Meteo forecast API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_CURRENT_FIELDS = "temperature_2m,weather_code,uv_index"
_DAILY_FIELDS = "weather_code,temperature_2m_max,temperature_2m_min"


class ForecastClient(Protocol):
    """Interface for weather forecast lookups."""

    async def fetch_forecast(self, lat: float, lon: float) -> dict[str, object]:
        """Return the raw forecast payload for a coordinate."""


@dataclass
class OpenMeteoClient(ForecastClient):
    """HTTPX-backed Open-Meteo client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "OpenMeteoClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def fetch_forecast(self, lat: float, lon: float) -> dict[str, object]:
        """Fetch current conditions and the daily forecast."""
        response = await self.http_client.get(
            f"{self.base_url}/forecast",
            params={
                "latitude": lat,
                "longitude": lon,
                "current": _CURRENT_FIELDS,
                "daily": _DAILY_FIELDS,
                "timezone": "auto",
                "wind_speed_unit": "ms",
            },
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
