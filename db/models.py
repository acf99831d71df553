"""Pydantic v2 models for persisted bot state.

Single table: user_profiles (one row per Telegram user).
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

FREE_TRIAL_PLAN = "free_trial"


class ConversationState(StrEnum):
    """Named conversation stages. Values are stored verbatim in the DB."""

    STARTED = "started"
    WAITING_BUSINESS_NAME = "waiting_business_name"
    WAITING_OWNER_NAME = "waiting_owner_name"
    WAITING_INDUSTRY = "waiting_industry"
    WAITING_BRAND_VOICE = "waiting_brand_voice"
    WAITING_BRAND_COLORS = "waiting_brand_colors"
    SETUP_COMPLETE = "setup_complete"
    TRIAL_EXPIRED = "trial_expired"
    PAID = "paid"


# States in which content-generation and stats requests are served
ACCEPTING_STATES: frozenset[ConversationState] = frozenset(
    {ConversationState.SETUP_COMPLETE, ConversationState.PAID}
)


# ---------------------------------------------------------------------------
# user_profiles
# ---------------------------------------------------------------------------


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int  # Telegram user ID (BIGINT PK)
    first_name: str | None = None
    state: ConversationState = ConversationState.STARTED

    # Onboarding answers, filled one per step
    business_name: str | None = None
    owner_name: str | None = None
    industry: str | None = None
    brand_voice: str | None = None
    brand_colors: str | None = None

    plan: str = FREE_TRIAL_PLAN
    subscription_active: bool = False
    content_generated: int = 0
    subscription_started_at: datetime | None = None

    started_at: datetime | None = None
    last_generated_at: datetime | None = None


class InboundMessage(BaseModel):
    """Transport-agnostic inbound chat message."""

    model_config = ConfigDict(frozen=True)

    chat_id: int
    user_id: int
    text: str = ""
    first_name: str = "Friend"


class OutboundMessage(BaseModel):
    """Reply handed to the transport. ``keyboard`` is a list of label rows."""

    model_config = ConfigDict(frozen=True)

    chat_id: int
    text: str
    keyboard: list[list[str]] | None = None
