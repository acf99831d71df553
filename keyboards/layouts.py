"""Reply-keyboard labels and row layouts.

Plain lists of strings so the conversation engine can return them without
depending on aiogram; keyboards/reply.py turns them into markup.
"""

BTN_SETUP_TEAM = "🤖 Setup My AI Team"
BTN_SEE_PLANS = "📋 See Plans & Pricing"
BTN_SOCIAL_POST = "📝 Social Media Post"
BTN_OFFER_POST = "🎯 Special Offer"
BTN_FESTIVAL_POST = "🎉 Festival Post"
BTN_STATS = "📊 My Stats"
BTN_MADE_PAYMENT = "💳 I Made Payment"

Layout = list[list[str]]

WELCOME_ROWS: Layout = [
    [BTN_SETUP_TEAM],
    [BTN_SEE_PLANS],
]

MAIN_MENU_ROWS: Layout = [
    [BTN_SOCIAL_POST, BTN_OFFER_POST],
    [BTN_FESTIVAL_POST, BTN_STATS],
    [BTN_SEE_PLANS],
]

UPGRADE_ROWS: Layout = [
    [BTN_MADE_PAYMENT],
    [BTN_SEE_PLANS],
]

BRAND_VOICE_ROWS: Layout = [
    ["Professional", "Friendly"],
    ["Fun & Casual", "Premium"],
]


def copy_rows(rows: Layout) -> Layout:
    """Fresh copy so callers can never mutate the shared layouts."""
    return [list(row) for row in rows]
