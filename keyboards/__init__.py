"""Keyboard layouts and builders for Telegram bot UI."""

from keyboards.layouts import (
    BRAND_VOICE_ROWS,
    MAIN_MENU_ROWS,
    UPGRADE_ROWS,
    WELCOME_ROWS,
)
from keyboards.reply import build_reply_markup

__all__ = [
    "BRAND_VOICE_ROWS",
    "MAIN_MENU_ROWS",
    "UPGRADE_ROWS",
    "WELCOME_ROWS",
    "build_reply_markup",
]
