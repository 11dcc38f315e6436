"""Playlist generation from a free-text vibe."""

import logging
from dataclasses import dataclass

from sun_planner.domain.suggestions import Playlist, Song
from sun_planner.services.generation import JsonGenerationClient

PLAYLIST_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "songs": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "artist": {"type": "string"},
                    "vibe": {"type": "string"},
                },
                "required": ["title", "artist", "vibe"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["songs"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


@dataclass
class PlaylistService:
    """Generates a short curated playlist."""

    client: JsonGenerationClient
    model: str
    reasoning_effort: str | None
    store: bool
    size: int = 5

    async def generate(self, vibe: str) -> list[Song]:
        """Return real songs matching the vibe, or an empty list on failure."""
        cleaned = vibe.strip()
        if not cleaned:
            return []
        prompt = (
            f"Create a curated list of {self.size} real songs based on the "
            f'user\'s vibe: "{cleaned}". '
            "Focus on popular songs available on Spotify. Reply with JSON only."
        )
        try:
            raw = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema_name="playlist",
                schema=PLAYLIST_SCHEMA,
                prompt=prompt,
            )
            return Playlist.model_validate(raw).songs
        except Exception:
            _logger.exception("Playlist generation failed for vibe=%r", cleaned)
            return []
