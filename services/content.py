"""Marketing content generation with an explicit success/failure result.

The generator never raises: every provider failure is logged and returned
as ``GenerationResult(error=...)``. The caller decides what to send instead,
normally ``fallback_content(profile)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

import structlog

from db.models import UserProfile

log = structlog.get_logger()

# Placeholders for profiles that reached a paid state before finishing setup
_DEFAULT_BUSINESS = "Your Business"
_DEFAULT_INDUSTRY = "products and services"


class ContentType(StrEnum):
    GENERAL = "general"
    OFFER = "offer"
    FESTIVAL = "festival"


_CONTENT_BRIEFS: dict[ContentType, str] = {
    ContentType.GENERAL: "an engaging general brand-awareness",
    ContentType.OFFER: "a special-offer / limited-time discount promotion",
    ContentType.FESTIVAL: "a festive greeting tied to the next major Indian festival",
}


class TextGenerator(Protocol):
    async def complete(self, prompt: str) -> str: ...


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Either provider text (``text``) or the reason it failed (``error``)."""

    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)

    def text_or(self, fallback: str) -> str:
        return self.text if self.ok and self.text else fallback


def build_prompt(profile: UserProfile, content_type: ContentType) -> str:
    """Structured prompt from the onboarding answers and the content type."""
    business = profile.business_name or _DEFAULT_BUSINESS
    industry = profile.industry or _DEFAULT_INDUSTRY
    return (
        f"Create {_CONTENT_BRIEFS[content_type]} social media post for {business}, "
        f"a {industry} business in India.\n"
        "Business details:\n"
        f"- Name: {business}\n"
        f"- Industry: {industry}\n"
        f"- Owner: {profile.owner_name or 'not provided'}\n"
        f"- Brand voice: {profile.brand_voice or 'friendly'}\n"
        f"- Brand colors: {profile.brand_colors or 'not provided'}\n"
        f"- Content type: {content_type.value}\n"
        "Requirements:\n"
        "1. Write in Hinglish (Hindi + English mix) for an Indian audience\n"
        "2. Include 8-12 relevant hashtags\n"
        "3. Use emojis naturally\n"
        "4. End with a clear call-to-action\n"
        "5. Keep it between 150 and 200 words\n"
        "6. Stay authentic to the brand voice and the industry\n"
        "Return only the post text."
    )


def fallback_content(profile: UserProfile) -> str:
    """Deterministic post built only from business name and industry."""
    business = profile.business_name or _DEFAULT_BUSINESS
    industry = profile.industry or _DEFAULT_INDUSTRY
    hashtag = "".join(business.lower().split())
    return (
        f"🌟 {business} - Quality You Can Trust! 🌟\n"
        f"✨ Experience the difference with our premium {industry}\n"
        "🎯 Trusted by families across the city\n"
        "📞 Contact us today for the best deals!\n"
        f"Visit us and see why customers choose {business}!\n"
        f"#quality #{hashtag} #trusted #local"
    )


class ContentGenerator:
    """Builds the prompt and makes exactly one generation call."""

    def __init__(self, client: TextGenerator) -> None:
        self._client = client

    async def generate(self, profile: UserProfile, content_type: ContentType) -> GenerationResult:
        prompt = build_prompt(profile, content_type)
        try:
            text = await self._client.complete(prompt)
        except Exception as exc:
            log.warning(
                "content_generation_failed",
                user_id=profile.id,
                content_type=content_type.value,
                error=str(exc)[:200],
                exc_info=True,
            )
            return GenerationResult(error=str(exc) or type(exc).__name__)

        if not text or not text.strip():
            log.warning("content_generation_empty", user_id=profile.id, content_type=content_type.value)
            return GenerationResult(error="empty response")

        return GenerationResult(text=text.strip())
