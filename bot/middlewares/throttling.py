"""ThrottlingMiddleware: per-user message rate limit (INCR + EXPIRE, fixed window)."""

from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from cache.client import RedisClient
from cache.keys import THROTTLE_WINDOW, CacheKeys

log = structlog.get_logger()

_MSG_RATE_LIMIT = 30  # messages per window


class ThrottlingMiddleware(BaseMiddleware):
    """Inner middleware: silently drops messages once a user exceeds the limit.

    Dropped messages never reach the conversation service, so they cannot
    move the state machine or count towards generation quota.
    """

    def __init__(
        self,
        redis: RedisClient,
        rate_limit: int = _MSG_RATE_LIMIT,
        window: int = THROTTLE_WINDOW,
    ) -> None:
        self._redis = redis
        self._rate_limit = rate_limit
        self._window = window

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        user = data.get("event_from_user")
        if user is None:
            return await handler(event, data)

        key = CacheKeys.throttle(user.id, "message")
        count = await self._redis.incr(key)
        # Fixed window: the first hit starts it, later hits never extend it
        if count == 1:
            await self._redis.expire(key, self._window)

        if count > self._rate_limit:
            # A key that lost its TTL (failed EXPIRE) would block the user forever
            if await self._redis.ttl(key) < 0:
                await self._redis.expire(key, self._window)
            if count == self._rate_limit + 1:
                log.warning("user_throttled", user_id=user.id, limit=self._rate_limit, window=self._window)
            return None

        return await handler(event, data)
