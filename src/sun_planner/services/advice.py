"""Sun exposure advice generated by an LLM."""

import logging
from dataclasses import dataclass
from typing import Protocol

from sun_planner.domain.exposure import FALLBACK_ADVICE, SkinType, SunAdvice
from sun_planner.services.generation import JsonGenerationClient

ADVICE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "safe_minutes": {
            "type": "integer",
            "minimum": 1,
            "description": "Maximum safe sun exposure time in minutes",
        },
        "spf_recommendation": {
            "type": "integer",
            "minimum": 0,
            "description": "Recommended SPF value",
        },
        "advice": {
            "type": "string",
            "description": "Short, friendly advice (max 15 words)",
        },
    },
    "required": ["safe_minutes", "spf_recommendation", "advice"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


class AdviceProvider(Protocol):
    """Source of exposure advice for a UV index and skin type."""

    async def get_advice(self, uv_index: float, skin_type: SkinType) -> SunAdvice:
        """Return advice; may raise on failure."""


@dataclass
class AdviceService(AdviceProvider):
    """Builds the advice prompt and validates the model output."""

    client: JsonGenerationClient
    model: str
    reasoning_effort: str | None
    store: bool
    language: str = "English"

    async def get_advice(self, uv_index: float, skin_type: SkinType) -> SunAdvice:
        """Ask the model for safe exposure time and SPF."""
        prompt = (
            'Context: the sun tanning app "Keep Me Tanned".\n'
            f"Data: UV index {uv_index}, skin type {skin_type.label}.\n"
            "Task: give sunbathing safety advice. Be cautious.\n"
            f"Language: {self.language}."
        )
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            schema_name="sun_advice",
            schema=ADVICE_SCHEMA,
            prompt=prompt,
        )
        return SunAdvice.model_validate(raw)


async def get_advice_or_fallback(
    provider: AdviceProvider, uv_index: float, skin_type: SkinType
) -> SunAdvice:
    """Return advice from the provider, or the conservative fallback on error."""
    try:
        return await provider.get_advice(uv_index, skin_type)
    except Exception:
        _logger.exception(
            "Advice request failed (uv=%s, skin=%s); using fallback",
            uv_index,
            skin_type.value,
        )
        return FALLBACK_ADVICE
