"""Inbound text → symbolic command normalization.

The conversation engine matches on Command values, never on display text,
so button copy can change without touching the state machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from keyboards.layouts import (
    BTN_FESTIVAL_POST,
    BTN_MADE_PAYMENT,
    BTN_OFFER_POST,
    BTN_SEE_PLANS,
    BTN_SETUP_TEAM,
    BTN_SOCIAL_POST,
    BTN_STATS,
)


class Command(StrEnum):
    START = "start"
    SEE_PLANS = "see_plans"
    SETUP_TEAM = "setup_team"
    MADE_PAYMENT = "made_payment"
    STATS = "stats"
    SOCIAL_POST = "social_post"
    OFFER_POST = "offer_post"
    FESTIVAL_POST = "festival_post"
    TEXT = "text"  # free text, no control meaning


_BUTTONS: dict[str, Command] = {
    BTN_SETUP_TEAM: Command.SETUP_TEAM,
    BTN_SEE_PLANS: Command.SEE_PLANS,
    BTN_MADE_PAYMENT: Command.MADE_PAYMENT,
    BTN_STATS: Command.STATS,
    BTN_SOCIAL_POST: Command.SOCIAL_POST,
    BTN_OFFER_POST: Command.OFFER_POST,
    BTN_FESTIVAL_POST: Command.FESTIVAL_POST,
}


@dataclass(frozen=True, slots=True)
class ParsedInput:
    command: Command
    text: str  # raw text, stripped


def parse_command(text: str) -> ParsedInput:
    """Map raw message text to a Command.

    ``/start`` matches with or without a deep-link payload or @botname suffix.
    Anything that is not a known button label is free text.
    """
    stripped = (text or "").strip()
    head = stripped.split(maxsplit=1)[0] if stripped else ""
    if head.split("@", 1)[0] == "/start":
        return ParsedInput(Command.START, stripped)
    return ParsedInput(_BUTTONS.get(stripped, Command.TEXT), stripped)
