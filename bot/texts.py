"""User-facing message copy (HTML parse mode).

Every value that came from the user or from the AI provider is escaped here.
"""

import html

from db.models import UserProfile
from services.plans import FREE_TRIAL_QUOTA, Plan
from services.usage import QuotaStatus


def _esc(value: str | None, default: str = "—") -> str:
    return html.escape(value) if value else default


def welcome_text(first_name: str) -> str:
    return (
        f"🚀 Welcome {_esc(first_name, 'Friend')} to <b>FlyHi Social</b> - Cloud AI Platform!\n\n"
        "🔥 <b>100% CLOUD POWERED:</b>\n"
        "✅ <b>Google Gemini AI</b> - fresh content on demand\n"
        "✅ <b>Serverless hosting</b> - always online\n"
        "✅ <b>No PC required</b> - runs in the cloud\n"
        "✅ <b>Professional branding</b> - built around your business\n\n"
        f"🎁 <b>FREE TRIAL:</b> {FREE_TRIAL_QUOTA} AI posts to get started!\n\n"
        "Ready to set up your cloud AI team? 👇"
    )


SETUP_BUSINESS_NAME = "🏢 <b>Step 1/5</b>\n\nWhat is your business name?"
SETUP_OWNER_NAME = "👤 <b>Step 2/5</b>\n\nWhat is the owner's name?"
SETUP_INDUSTRY = "🏭 <b>Step 3/5</b>\n\nWhich industry are you in? (e.g. bakery, salon, clothing store)"
SETUP_BRAND_VOICE = "🎙 <b>Step 4/5</b>\n\nPick a brand voice, or type your own:"
SETUP_BRAND_COLORS = "🎨 <b>Step 5/5</b>\n\nWhat are your brand colors? (e.g. Red and Gold)"


def setup_complete_text(profile: UserProfile) -> str:
    return (
        "🎉 <b>Your AI team is ready!</b>\n\n"
        f"🏢 Business: {_esc(profile.business_name)}\n"
        f"👤 Owner: {_esc(profile.owner_name)}\n"
        f"🏭 Industry: {_esc(profile.industry)}\n"
        f"🎙 Voice: {_esc(profile.brand_voice)}\n"
        f"🎨 Colors: {_esc(profile.brand_colors)}\n\n"
        "Choose what to create 👇"
    )


UPGRADE_PROMPT = (
    "⏰ <b>Your free trial has ended!</b>\n\n"
    f"You have used all {FREE_TRIAL_QUOTA} free AI posts.\n"
    "Upgrade to keep your AI team working for you.\n\n"
    "Tap <b>See Plans &amp; Pricing</b> to compare plans, then "
    "<b>I Made Payment</b> once you have paid."
)

PAYMENT_TOKEN_PROMPT = (
    "💳 Please send your payment transaction ID.\n\n"
    "It should be 6-20 letters or digits, e.g. <code>ABC12345</code>."
)


def payment_success_text(plan: Plan) -> str:
    posts = "unlimited" if plan.is_unlimited else str(int(plan.monthly_quota))
    return (
        "✅ <b>Payment recorded!</b>\n\n"
        f"Your <b>{plan.name}</b> plan is active: {posts} posts per month.\n"
        "Choose what to create 👇"
    )


def stats_text(profile: UserProfile, quota: QuotaStatus) -> str:
    status = "Active ✅" if quota.subscription_active else "Free trial"
    lines = [
        "📊 <b>Your Stats</b>",
        "",
        f"🏢 Business: {_esc(profile.business_name)}",
        f"🏭 Industry: {_esc(profile.industry)}",
        f"💎 Plan: {html.escape(quota.plan_name)} ({status})",
        f"📝 Posts generated: {quota.used}",
        f"🎯 Remaining: {quota.remaining_label} of {quota.limit_label}",
    ]
    if profile.subscription_started_at:
        lines.append(f"📅 Subscribed since: {profile.subscription_started_at:%d %b %Y}")
    if profile.last_generated_at:
        lines.append(f"🕒 Last post: {profile.last_generated_at:%d %b %Y %H:%M} UTC")
    return "\n".join(lines)


_CONTENT_TITLES: dict[str, str] = {
    "general": "📝 <b>Your Social Media Post</b>",
    "offer": "🎯 <b>Your Special Offer Post</b>",
    "festival": "🎉 <b>Your Festival Post</b>",
}


def generated_content_text(content_type: str, content: str) -> str:
    title = _CONTENT_TITLES.get(content_type, _CONTENT_TITLES["general"])
    return f"{title}\n\n{html.escape(content)}\n\n✨ Copy and share it with your customers!"


FALLBACK_MENU = "🤔 I didn't get that. Please use the menu buttons below, or send /start to begin again."
