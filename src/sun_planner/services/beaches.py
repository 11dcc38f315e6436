"""Nearby beach recommendations."""

import logging
from dataclasses import dataclass

from sun_planner.domain.suggestions import BeachList, BeachLocation
from sun_planner.domain.weather import GeoLocation
from sun_planner.services.generation import JsonGenerationClient

BEACH_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "beaches": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "lat": {"type": "number"},
                    "lon": {"type": "number"},
                    "description": {"type": "string"},
                },
                "required": ["name", "lat", "lon", "description"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["beaches"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


@dataclass
class BeachService:
    """Asks the model for real sunbathing spots near a coordinate."""

    client: JsonGenerationClient
    model: str
    reasoning_effort: str | None
    store: bool
    language: str = "English"
    count: int = 3

    async def find_nearby(self, location: GeoLocation) -> list[BeachLocation]:
        """Return nearby beaches or parks, or an empty list on failure."""
        prompt = (
            f"Find {self.count} ACTUAL public beaches, bathing spots or parks "
            "suitable for sunbathing near the coordinates: "
            f"latitude {location.lat}, longitude {location.lon}.\n"
            "1. Do NOT invent places.\n"
            "2. The places must be real and findable on a map.\n"
            "3. Return their exact coordinates. If unsure, pick a well-known "
            "nearby place.\n"
            "4. In a city without beaches, pick popular parks where people "
            "sunbathe.\n"
            f"Write the descriptions briefly in {self.language}."
        )
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema_name="nearby_beaches",
                schema=BEACH_SCHEMA,
                prompt=prompt,
            )
            return BeachList.model_validate(raw).beaches
        except Exception:
            _logger.exception(
                "Beach lookup failed near lat=%s lon=%s", location.lat, location.lon
            )
            return []
