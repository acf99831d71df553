"""Conversation state machine and per-message orchestration.

ConversationEngine is pure: (profile, command, now) → Decision. It never
touches storage or the network. ConversationService wraps one inbound
message: per-user lock → load/create → decide → generate → persist.

Routing precedence (first match wins):
1. /start resets from any state
2. over-quota check moves a trial user to trial_expired
3. payment flow inside trial_expired (made-payment prompt, token)
3b. pricing summary (stateless)
4. onboarding step for the current state
5. accepting-state menu actions (stats, content requests)
6. fallback reply
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from bot import texts
from bot.commands import Command, ParsedInput
from cache.client import RedisClient
from cache.keys import PROFILE_LOCK_TTL
from cache.locks import profile_lock
from db.models import (
    ACCEPTING_STATES,
    ConversationState,
    InboundMessage,
    OutboundMessage,
    UserProfile,
)
from db.repositories.profiles import ProfileStore
from keyboards.layouts import (
    BRAND_VOICE_ROWS,
    MAIN_MENU_ROWS,
    UPGRADE_ROWS,
    WELCOME_ROWS,
    Layout,
    copy_rows,
)
from services.content import ContentGenerator, ContentType, GenerationResult, fallback_content
from services.plans import DEFAULT_PAID_PLAN, format_pricing_text, get_plan
from services.usage import describe_quota, is_over_quota

log = structlog.get_logger()

PAYMENT_TOKEN_RE = re.compile(r"^[a-zA-Z0-9]{6,20}$")
MAX_FIELD_LENGTH = 200

_CONTENT_COMMANDS: dict[Command, ContentType] = {
    Command.SOCIAL_POST: ContentType.GENERAL,
    Command.OFFER_POST: ContentType.OFFER,
    Command.FESTIVAL_POST: ContentType.FESTIVAL,
}


@dataclass(frozen=True, slots=True)
class OnboardingStep:
    field: str
    next_state: ConversationState
    prompt: str
    keyboard: Layout | None = None


# Prompt/keyboard of a step describe what is asked NEXT, after storing ``field``
ONBOARDING_STEPS: dict[ConversationState, OnboardingStep] = {
    ConversationState.WAITING_BUSINESS_NAME: OnboardingStep(
        "business_name", ConversationState.WAITING_OWNER_NAME, texts.SETUP_OWNER_NAME
    ),
    ConversationState.WAITING_OWNER_NAME: OnboardingStep(
        "owner_name", ConversationState.WAITING_INDUSTRY, texts.SETUP_INDUSTRY
    ),
    ConversationState.WAITING_INDUSTRY: OnboardingStep(
        "industry", ConversationState.WAITING_BRAND_VOICE, texts.SETUP_BRAND_VOICE, BRAND_VOICE_ROWS
    ),
    ConversationState.WAITING_BRAND_VOICE: OnboardingStep(
        "brand_voice", ConversationState.WAITING_BRAND_COLORS, texts.SETUP_BRAND_COLORS
    ),
    ConversationState.WAITING_BRAND_COLORS: OnboardingStep(
        "brand_colors", ConversationState.SETUP_COMPLETE, ""  # summary built from profile
    ),
}

# Question to repeat when a step receives unusable input
_STEP_QUESTIONS: dict[ConversationState, tuple[str, Layout | None]] = {
    ConversationState.WAITING_BUSINESS_NAME: (texts.SETUP_BUSINESS_NAME, None),
    ConversationState.WAITING_OWNER_NAME: (texts.SETUP_OWNER_NAME, None),
    ConversationState.WAITING_INDUSTRY: (texts.SETUP_INDUSTRY, None),
    ConversationState.WAITING_BRAND_VOICE: (texts.SETUP_BRAND_VOICE, BRAND_VOICE_ROWS),
    ConversationState.WAITING_BRAND_COLORS: (texts.SETUP_BRAND_COLORS, None),
}


@dataclass(frozen=True, slots=True)
class Reply:
    text: str
    keyboard: Layout | None = None


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of one transition.

    Exactly one of ``reply`` / ``generate`` is set: a content request is
    answered only after the generator ran (see ConversationEngine.record_generation).
    """

    profile: UserProfile
    route: str
    reply: Reply | None = None
    generate: ContentType | None = None


def _reply(text: str, rows: Layout | None = None) -> Reply:
    return Reply(text=text, keyboard=copy_rows(rows) if rows is not None else None)


class ConversationEngine:
    """Pure transition function over UserProfile."""

    def decide(
        self,
        profile: UserProfile,
        parsed: ParsedInput,
        first_name: str,
        now: datetime,
    ) -> Decision:
        command = parsed.command

        # 1. /start always resets
        if command is Command.START:
            updated = profile.model_copy(
                update={"state": ConversationState.STARTED, "first_name": first_name}
            )
            return Decision(updated, "start", _reply(texts.welcome_text(first_name), WELCOME_ROWS))

        # 2. Quota pre-empts everything else
        if profile.state is not ConversationState.TRIAL_EXPIRED and is_over_quota(profile):
            updated = profile.model_copy(update={"state": ConversationState.TRIAL_EXPIRED})
            return Decision(updated, "quota_exceeded", _reply(texts.UPGRADE_PROMPT, UPGRADE_ROWS))

        # 3. Payment flow
        if profile.state is ConversationState.TRIAL_EXPIRED:
            if command is Command.MADE_PAYMENT:
                return Decision(profile, "payment_prompt", _reply(texts.PAYMENT_TOKEN_PROMPT, UPGRADE_ROWS))
            if command is Command.TEXT and PAYMENT_TOKEN_RE.fullmatch(parsed.text):
                return self._activate_subscription(profile, parsed.text, now)

        # 3b. Pricing is available everywhere and never mutates
        if command is Command.SEE_PLANS:
            return Decision(profile, "see_plans", _reply(format_pricing_text(), self._menu_for(profile)))

        # 4. Onboarding
        if profile.state is ConversationState.STARTED and command is Command.SETUP_TEAM:
            updated = profile.model_copy(update={"state": ConversationState.WAITING_BUSINESS_NAME})
            return Decision(updated, "setup_started", _reply(texts.SETUP_BUSINESS_NAME))
        step = ONBOARDING_STEPS.get(profile.state)
        if step is not None and command is Command.TEXT:
            return self._onboarding_step(profile, step, parsed.text)

        # 5. Accepting-state menu
        if profile.state in ACCEPTING_STATES:
            if command is Command.STATS:
                quota = describe_quota(profile)
                return Decision(profile, "stats", _reply(texts.stats_text(profile, quota), MAIN_MENU_ROWS))
            content_type = _CONTENT_COMMANDS.get(command)
            if content_type is not None:
                return Decision(profile, "generate", generate=content_type)

        # 6. Fallback
        return Decision(profile, "fallback", _reply(texts.FALLBACK_MENU, self._menu_for(profile)))

    def record_generation(
        self,
        profile: UserProfile,
        content_type: ContentType,
        result: GenerationResult,
        now: datetime,
    ) -> Decision:
        """Count the generation and build the reply (provider text or fallback)."""
        content = result.text_or(fallback_content(profile))
        updated = profile.model_copy(
            update={
                "content_generated": profile.content_generated + 1,
                "last_generated_at": now,
            }
        )
        route = "generated" if result.ok else "generated_fallback"
        return Decision(
            updated,
            route,
            _reply(texts.generated_content_text(content_type.value, content), MAIN_MENU_ROWS),
        )

    def _activate_subscription(self, profile: UserProfile, token: str, now: datetime) -> Decision:
        # Token is recorded as proof of payment without verification
        plan = get_plan(DEFAULT_PAID_PLAN)
        updated = profile.model_copy(
            update={
                "state": ConversationState.PAID,
                "subscription_active": True,
                "plan": plan.id,
                "content_generated": 0,
                "subscription_started_at": now,
            }
        )
        log.info("subscription_activated", user_id=profile.id, plan=plan.id, token_length=len(token))
        return Decision(updated, "payment_activated", _reply(texts.payment_success_text(plan), MAIN_MENU_ROWS))

    @staticmethod
    def _onboarding_step(profile: UserProfile, step: OnboardingStep, text: str) -> Decision:
        value = text.strip()
        if not value or len(value) > MAX_FIELD_LENGTH:
            question, rows = _STEP_QUESTIONS[profile.state]
            return Decision(profile, "onboarding_invalid", _reply(question, rows))

        updated = profile.model_copy(update={step.field: value, "state": step.next_state})
        if step.next_state is ConversationState.SETUP_COMPLETE:
            return Decision(updated, "setup_complete", _reply(texts.setup_complete_text(updated), MAIN_MENU_ROWS))
        return Decision(updated, f"onboarding_{step.field}", _reply(step.prompt, step.keyboard))

    @staticmethod
    def _menu_for(profile: UserProfile) -> Layout | None:
        if profile.state is ConversationState.TRIAL_EXPIRED:
            return UPGRADE_ROWS
        if profile.state in ACCEPTING_STATES:
            return MAIN_MENU_ROWS
        if profile.state is ConversationState.STARTED:
            return WELCOME_ROWS
        if profile.state is ConversationState.WAITING_BRAND_VOICE:
            return BRAND_VOICE_ROWS
        return None


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ConversationService:
    """Handles one inbound message end to end, except delivery.

    Load → mutate → store runs under the per-user profile lock. Nothing is
    written when the engine raises, so a failed request leaves the stored
    profile as it was.
    """

    def __init__(
        self,
        store: ProfileStore,
        redis: RedisClient,
        generator: ContentGenerator,
        engine: ConversationEngine | None = None,
        lock_ttl: int = PROFILE_LOCK_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._redis = redis
        self._generator = generator
        self._engine = engine or ConversationEngine()
        self._lock_ttl = lock_ttl
        self._clock = clock

    async def handle(self, inbound: InboundMessage, parsed: ParsedInput) -> OutboundMessage:
        async with profile_lock(self._redis, inbound.user_id, ttl=self._lock_ttl):
            now = self._clock()
            profile = await self._store.get(inbound.user_id)
            is_new = profile is None
            if profile is None:
                profile = UserProfile(id=inbound.user_id, first_name=inbound.first_name, started_at=now)
                log.info("profile_created", user_id=inbound.user_id)

            decision = self._engine.decide(profile, parsed, inbound.first_name, now)
            if decision.generate is not None:
                result = await self._generator.generate(decision.profile, decision.generate)
                decision = self._engine.record_generation(
                    decision.profile, decision.generate, result, self._clock()
                )

            if is_new or decision.profile != profile:
                await self._store.upsert(decision.profile)

        log.info(
            "conversation_transition",
            user_id=inbound.user_id,
            command=parsed.command.value,
            route=decision.route,
            state_from=profile.state.value,
            state_to=decision.profile.state.value,
        )
        reply = decision.reply
        if reply is None:  # pragma: no cover - record_generation always sets a reply
            reply = Reply(texts.FALLBACK_MENU)
        return OutboundMessage(chat_id=inbound.chat_id, text=reply.text, keyboard=reply.keyboard)
