"""Reply keyboards (persistent bottom buttons)."""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove

from keyboards.layouts import BRAND_VOICE_ROWS, WELCOME_ROWS

# Layouts that are shown once and should collapse after a tap (matched by first label)
_ONE_TIME_FIRST_LABELS = frozenset({WELCOME_ROWS[0][0], BRAND_VOICE_ROWS[0][0]})


def build_reply_markup(rows: list[list[str]] | None) -> ReplyKeyboardMarkup | ReplyKeyboardRemove | None:
    """Convert label rows into a ReplyKeyboardMarkup.

    None leaves the current keyboard untouched; an empty list removes it.
    """
    if rows is None:
        return None
    if not rows:
        return ReplyKeyboardRemove()
    keyboard = [[KeyboardButton(text=label) for label in row] for row in rows]
    one_time = bool(rows[0]) and rows[0][0] in _ONE_TIME_FIRST_LABELS
    return ReplyKeyboardMarkup(
        keyboard=keyboard,
        resize_keyboard=True,
        one_time_keyboard=one_time,
    )
