"""Shared interface for structured JSON generation."""

from typing import Protocol


class JsonGenerationClient(Protocol):
    """Interface for LLM calls that return JSON matching a schema."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured JSON data."""
