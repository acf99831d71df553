"""Per-user profile lock (Redis SET NX EX).

Makes load → mutate → store of one profile a single unit when Telegram
delivers several updates from the same user concurrently.
"""

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

from bot.exceptions import ProfileBusyError
from cache.client import RedisClient
from cache.keys import PROFILE_LOCK_TTL, CacheKeys

log = structlog.get_logger()

_ACQUIRE_ATTEMPTS = 20
_ACQUIRE_DELAY = 0.25  # seconds between attempts (~5 s total wait)


@asynccontextmanager
async def profile_lock(
    redis: RedisClient,
    user_id: int,
    ttl: int = PROFILE_LOCK_TTL,
    attempts: int = _ACQUIRE_ATTEMPTS,
    delay: float = _ACQUIRE_DELAY,
) -> AsyncIterator[None]:
    """Hold the lock for ``user_id`` for the duration of the block.

    Raises ProfileBusyError if the lock is still held after ``attempts`` tries.
    The TTL releases a lock left behind by a crashed worker.
    """
    key = CacheKeys.profile_lock(user_id)
    token = uuid.uuid4().hex

    for attempt in range(attempts):
        if await redis.set(key, token, ex=ttl, nx=True):
            break
        if attempt + 1 < attempts:
            await asyncio.sleep(delay)
    else:
        log.warning("profile_lock_timeout", user_id=user_id, attempts=attempts)
        raise ProfileBusyError()

    try:
        yield
    finally:
        # Only release our own lock; after TTL expiry another worker may own it
        await redis.delete_if_equals(key, token)
