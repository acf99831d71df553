"""Subscription plan catalog.

Prices are in INR per month. ``monthly_quota`` is display-only for paid
plans: blocking applies to the free trial alone (see services/usage.py).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from bot.exceptions import UnknownPlanError
from db.models import FREE_TRIAL_PLAN


@dataclass(frozen=True, slots=True)
class Plan:
    """Monthly subscription tier."""

    id: str
    name: str
    price: int  # INR / month
    monthly_quota: float  # posts per month, math.inf = unlimited

    @property
    def is_unlimited(self) -> bool:
        return math.isinf(self.monthly_quota)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

PLANS: dict[str, Plan] = {
    "starter": Plan(id="starter", name="Starter", price=1499, monthly_quota=30),
    "growth": Plan(id="growth", name="Growth", price=3499, monthly_quota=100),
    "professional": Plan(
        id="professional",
        name="Professional",
        price=9999,
        monthly_quota=math.inf,
    ),
}

FREE_TRIAL_QUOTA = 5
FREE_TRIAL_NAME = "Free Trial"

# Plan granted by a payment token submission
DEFAULT_PAID_PLAN = "starter"


def get_plan(plan_id: str) -> Plan:
    """Look up a paid plan. Raises UnknownPlanError for ids outside the catalog."""
    try:
        return PLANS[plan_id]
    except KeyError:
        raise UnknownPlanError(plan_id) from None


def plan_display_name(plan_id: str) -> str:
    """Display name for any plan id a profile can carry, including the trial."""
    if plan_id == FREE_TRIAL_PLAN:
        return FREE_TRIAL_NAME
    return get_plan(plan_id).name


def format_quota(quota: float) -> str:
    return "Unlimited" if math.isinf(quota) else str(int(quota))


def format_pricing_text() -> str:
    """Pricing summary shown for the "See Plans & Pricing" button."""
    lines = ["💎 <b>FlyHi Social Plans</b>", ""]
    for plan in PLANS.values():
        posts = "Unlimited posts" if plan.is_unlimited else f"{format_quota(plan.monthly_quota)} posts"
        lines.append(f"<b>{plan.name}</b> — ₹{plan.price:,}/month · {posts}")
    lines.append("")
    lines.append(f"🎁 Free trial: {FREE_TRIAL_QUOTA} AI posts, no card required.")
    return "\n".join(lines)
