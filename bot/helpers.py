"""Shared helpers for router handlers."""

from __future__ import annotations

import structlog
from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.types import Message

from db.models import InboundMessage, OutboundMessage
from keyboards.reply import build_reply_markup

log = structlog.get_logger()


def inbound_from_message(message: Message) -> InboundMessage | None:
    """Build an InboundMessage from an aiogram Message.

    Returns None for updates without a sender (channel posts, anonymous admins).
    """
    user = message.from_user
    if user is None:
        return None
    return InboundMessage(
        chat_id=message.chat.id,
        user_id=user.id,
        text=message.text or "",
        first_name=user.first_name or "Friend",
    )


async def send_outbound(bot: Bot, outbound: OutboundMessage) -> Message | None:
    """Deliver a reply. Delivery failures are logged, never raised.

    The profile is already persisted at this point, so a failed send must not
    turn into an error reply for a request that otherwise succeeded.
    """
    try:
        return await bot.send_message(
            chat_id=outbound.chat_id,
            text=outbound.text,
            reply_markup=build_reply_markup(outbound.keyboard),
        )
    except TelegramAPIError:
        log.warning("send_outbound_failed", chat_id=outbound.chat_id, exc_info=True)
        return None
