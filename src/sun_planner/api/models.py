"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from sun_planner.domain.exposure import SkinType
from sun_planner.domain.preferences import Theme


class CoordinatesRequest(BaseModel):
    """Optional client coordinates; missing values use the fallback."""

    lat: float | None = None
    lon: float | None = None


class OnboardingRequest(BaseModel):
    """Onboarding form payload."""

    name: str = Field(min_length=1, max_length=80)
    skin_type: SkinType


class SkinTypeRequest(BaseModel):
    """Skin type update payload."""

    skin_type: SkinType


class ThemeRequest(BaseModel):
    """Theme update payload."""

    theme: Theme


class PlaylistRequest(BaseModel):
    """Playlist generation payload."""

    vibe: str = Field(max_length=200)
