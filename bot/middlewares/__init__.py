"""Aiogram middleware chain: throttling and logging on messages."""

from bot.middlewares.logging import LoggingMiddleware
from bot.middlewares.throttling import ThrottlingMiddleware

__all__ = [
    "LoggingMiddleware",
    "ThrottlingMiddleware",
]
