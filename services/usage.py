"""Usage gate: free-trial quota decisions.

Zero dependencies on Telegram/Aiogram. Pure functions over UserProfile.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from db.models import FREE_TRIAL_PLAN, UserProfile
from services.plans import FREE_TRIAL_QUOTA, format_quota, get_plan, plan_display_name


@dataclass(frozen=True, slots=True)
class QuotaStatus:
    """Read-only quota snapshot for the stats screen."""

    plan_id: str
    plan_name: str
    subscription_active: bool
    used: int
    limit: float  # math.inf = unlimited
    remaining: float

    @property
    def limit_label(self) -> str:
        return format_quota(self.limit)

    @property
    def remaining_label(self) -> str:
        return format_quota(self.remaining)


def is_over_quota(profile: UserProfile) -> bool:
    """True iff a trial user has used up the free posts.

    Paid plans are never blocked here; their monthly quota is display-only.
    """
    return not profile.subscription_active and profile.content_generated >= FREE_TRIAL_QUOTA


def describe_quota(profile: UserProfile) -> QuotaStatus:
    """Build quota snapshot. Raises UnknownPlanError for a plan outside the catalog."""
    if profile.plan == FREE_TRIAL_PLAN:
        limit: float = FREE_TRIAL_QUOTA
    else:
        limit = get_plan(profile.plan).monthly_quota

    remaining = math.inf if math.isinf(limit) else max(limit - profile.content_generated, 0)
    return QuotaStatus(
        plan_id=profile.plan,
        plan_name=plan_display_name(profile.plan),
        subscription_active=profile.subscription_active,
        used=profile.content_generated,
        limit=limit,
        remaining=remaining,
    )
