"""Models for AI generated suggestions."""

from pydantic import BaseModel


class Song(BaseModel):
    """Single playlist entry."""

    title: str
    artist: str
    vibe: str


class Playlist(BaseModel):
    """Structured output for playlist generation."""

    songs: list[Song]


class BeachLocation(BaseModel):
    """A real sunbathing spot near the user."""

    name: str
    lat: float
    lon: float
    description: str


class BeachList(BaseModel):
    """Structured output for beach lookup."""

    beaches: list[BeachLocation]
