"""Domain models for sun exposure planning."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SkinType(StrEnum):
    """Fitzpatrick-style skin categories ordered by photosensitivity."""

    TYPE_1 = "I"
    TYPE_2 = "II"
    TYPE_3 = "III"
    TYPE_4 = "IV"
    TYPE_5 = "V"
    TYPE_6 = "VI"

    @property
    def rank(self) -> int:
        """Return 1 for the most sensitive category up to 6."""
        return list(SkinType).index(self) + 1

    @property
    def description(self) -> str:
        """Return a short human description of the category."""
        return _SKIN_DESCRIPTIONS[self]

    @property
    def label(self) -> str:
        """Return the category with its description, e.g. ``III - Sometimes burns``."""
        return f"{self.value} - {self.description}"


_SKIN_DESCRIPTIONS = {
    SkinType.TYPE_1: "Always burns",
    SkinType.TYPE_2: "Usually burns",
    SkinType.TYPE_3: "Sometimes burns",
    SkinType.TYPE_4: "Rarely burns",
    SkinType.TYPE_5: "Very rarely burns",
    SkinType.TYPE_6: "Never burns",
}


@dataclass(frozen=True)
class ExposureProfile:
    """UV reading and skin category that an advice request is made for."""

    uv_index: float
    skin_type: SkinType

    def __post_init__(self) -> None:
        if self.uv_index < 0:
            raise ValueError("uv_index must be non-negative")


class SunAdvice(BaseModel):
    """Safe exposure recommendation for a UV index and skin type."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    safe_minutes: int = Field(gt=0)
    spf_recommendation: int = Field(ge=0)
    message: str = Field(alias="advice")


FALLBACK_MESSAGE = "Technical error. Play it safe and use a high SPF!"

FALLBACK_ADVICE = SunAdvice(
    safe_minutes=15,
    spf_recommendation=30,
    message=FALLBACK_MESSAGE,
)
