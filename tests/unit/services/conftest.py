"""Shared fixtures for service tests: profile factory and an in-memory ProfileStore."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from db.models import ConversationState, UserProfile

NOW = datetime(2026, 1, 15, 10, 30, tzinfo=UTC)


def _make_profile(**overrides: Any) -> UserProfile:
    defaults: dict[str, Any] = {
        "id": 123456,
        "first_name": "Asha",
        "state": ConversationState.STARTED,
        "started_at": datetime(2026, 1, 1, tzinfo=UTC),
    }
    defaults.update(overrides)
    return UserProfile(**defaults)


def _completed_profile(**overrides: Any) -> UserProfile:
    defaults: dict[str, Any] = {
        "state": ConversationState.SETUP_COMPLETE,
        "business_name": "Sweet Treats",
        "owner_name": "Asha Rao",
        "industry": "bakery",
        "brand_voice": "Friendly",
        "brand_colors": "Pink and White",
    }
    defaults.update(overrides)
    return _make_profile(**defaults)


class InMemoryProfileStore:
    """ProfileStore backed by a dict. Counts writes so tests can assert on them."""

    def __init__(self) -> None:
        self.profiles: dict[int, UserProfile] = {}
        self.writes = 0

    async def get(self, user_id: int) -> UserProfile | None:
        profile = self.profiles.get(user_id)
        return profile.model_copy() if profile else None

    async def upsert(self, profile: UserProfile) -> UserProfile:
        self.writes += 1
        self.profiles[profile.id] = profile.model_copy()
        return profile

    def seed(self, profile: UserProfile) -> None:
        self.profiles[profile.id] = profile


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    return _make_profile


@pytest.fixture
def completed_profile() -> Callable[..., UserProfile]:
    """Factory for a profile that finished onboarding (setup_complete by default)."""
    return _completed_profile


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()
