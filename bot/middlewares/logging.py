"""LoggingMiddleware: correlation_id bound to structlog contextvars, latency per update."""

import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

log = structlog.get_logger()


class LoggingMiddleware(BaseMiddleware):
    """Inner middleware: every log line emitted while handling an update
    carries the same correlation_id and user_id.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        correlation_id = str(uuid.uuid4())
        data["correlation_id"] = correlation_id

        user = data.get("event_from_user")
        user_id = user.id if user else None

        start = time.monotonic()
        with structlog.contextvars.bound_contextvars(correlation_id=correlation_id, user_id=user_id):
            try:
                result = await handler(event, data)
            except Exception:
                # Traceback and Sentry report come from the dispatcher error handler
                log.info(
                    "request_failed",
                    update_type=type(event).__name__,
                    latency_ms=round((time.monotonic() - start) * 1000, 2),
                )
                raise
            log.info(
                "request_handled",
                update_type=type(event).__name__,
                latency_ms=round((time.monotonic() - start) * 1000, 2),
            )
            return result
