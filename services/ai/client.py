"""Generation client: single OpenRouter chat completion call.

Uses AsyncOpenAI with base_url="https://openrouter.ai/api/v1" and a Gemini
model id. One attempt per call: the SDK's built-in retries are disabled.
"""

import time

import httpx
import structlog
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from bot.exceptions import AIGenerationError

log = structlog.get_logger()

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


class GenerationClient:
    """Text-in, text-out wrapper around the OpenRouter chat completions API.

    Raises AIGenerationError on any provider failure or empty response.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        site_url: str = "",
    ) -> None:
        self._client = AsyncOpenAI(
            base_url=OPENROUTER_BASE_URL,
            api_key=api_key,
            http_client=http_client,
            max_retries=0,
            default_headers={"HTTP-Referer": site_url} if site_url else {},
        )
        self._model = model
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, prompt: str, temperature: float = 0.8) -> str:
        """Return the model's text for a single user prompt."""
        start = time.monotonic()
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                timeout=self._timeout,
            )
        except APITimeoutError as exc:
            raise AIGenerationError(message=f"OpenRouter timeout after {self._timeout}s") from exc
        except APIConnectionError as exc:
            raise AIGenerationError(message=f"OpenRouter connection error: {exc}") from exc
        except APIStatusError as exc:
            raise AIGenerationError(
                message=f"OpenRouter API error: status={exc.status_code}",
            ) from exc

        if not response.choices:
            raise AIGenerationError(message="OpenRouter returned empty choices")

        choice = response.choices[0]
        if getattr(choice, "finish_reason", None) == "content_filter":
            raise AIGenerationError(message="Generation blocked by content filter")

        content = (choice.message.content or "").strip()
        if not content:
            raise AIGenerationError(message="OpenRouter returned empty content")

        usage = response.usage
        log.info(
            "generation_complete",
            model=response.model or self._model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            generation_time_ms=int((time.monotonic() - start) * 1000),
        )
        return content
