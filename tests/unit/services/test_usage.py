"""Tests for services/usage.py: quota gate and quota snapshot."""

from __future__ import annotations

import math
from collections.abc import Callable

import pytest

from bot.exceptions import UnknownPlanError
from db.models import UserProfile
from services.usage import describe_quota, is_over_quota

ProfileFactory = Callable[..., UserProfile]


class TestIsOverQuota:
    @pytest.mark.parametrize(("used", "expected"), [(0, False), (4, False), (5, True), (12, True)])
    def test_trial_threshold(self, make_profile: ProfileFactory, used: int, expected: bool) -> None:
        assert is_over_quota(make_profile(content_generated=used)) is expected

    def test_active_subscription_never_over(self, make_profile: ProfileFactory) -> None:
        profile = make_profile(plan="starter", subscription_active=True, content_generated=1000)
        assert is_over_quota(profile) is False

    def test_inactive_paid_plan_uses_trial_limit(self, make_profile: ProfileFactory) -> None:
        profile = make_profile(plan="starter", subscription_active=False, content_generated=5)
        assert is_over_quota(profile) is True


class TestDescribeQuota:
    def test_trial(self, make_profile: ProfileFactory) -> None:
        status = describe_quota(make_profile(content_generated=2))
        assert status.plan_id == "free_trial"
        assert status.plan_name == "Free Trial"
        assert status.used == 2
        assert status.limit == 5
        assert status.remaining == 3
        assert status.subscription_active is False

    def test_remaining_never_negative(self, make_profile: ProfileFactory) -> None:
        profile = make_profile(plan="starter", subscription_active=True, content_generated=45)
        status = describe_quota(profile)
        assert status.limit == 30
        assert status.remaining == 0
        assert status.remaining_label == "0"

    def test_unlimited(self, make_profile: ProfileFactory) -> None:
        profile = make_profile(plan="professional", subscription_active=True, content_generated=250)
        status = describe_quota(profile)
        assert math.isinf(status.limit)
        assert math.isinf(status.remaining)
        assert status.limit_label == "Unlimited"
        assert status.remaining_label == "Unlimited"

    def test_unknown_plan_raises(self, make_profile: ProfileFactory) -> None:
        with pytest.raises(UnknownPlanError):
            describe_quota(make_profile(plan="legacy_gold"))

    def test_has_no_side_effects(self, make_profile: ProfileFactory) -> None:
        profile = make_profile(content_generated=3)
        before = profile.model_copy()
        describe_quota(profile)
        assert profile == before
