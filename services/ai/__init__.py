"""AI services: OpenRouter generation client."""

from services.ai.client import DEFAULT_MODEL, OPENROUTER_BASE_URL, GenerationClient

__all__ = [
    "DEFAULT_MODEL",
    "OPENROUTER_BASE_URL",
    "GenerationClient",
]
