"""Chat router: every message goes through the conversation service.

Media without a caption arrives as empty text and ends up in the fallback
reply (or a repeated onboarding question).
"""

import structlog
from aiogram import Bot, Router
from aiogram.types import Message

from bot.commands import parse_command
from bot.helpers import inbound_from_message, send_outbound
from services.conversation import ConversationService

log = structlog.get_logger()
router = Router()


@router.message()
async def handle_message(message: Message, bot: Bot, conversation_service: ConversationService) -> None:
    """Normalize text into a Command, run the transition, deliver the reply."""
    inbound = inbound_from_message(message)
    if inbound is None:
        log.debug("message_without_sender", chat_id=message.chat.id)
        return

    outbound = await conversation_service.handle(inbound, parse_command(inbound.text))
    await send_outbound(bot, outbound)
