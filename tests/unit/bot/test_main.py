"""Tests for bot/main.py: dispatcher creation, middleware chain, error handler, app wiring."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from aiogram import Dispatcher, Router
from aiogram.types import ErrorEvent, Update

from bot.exceptions import AIGenerationError, ProfileBusyError, UnknownPlanError
from bot.main import (
    _global_error_handler,
    create_app,
    create_bot,
    create_dispatcher,
    create_http_client,
    on_shutdown,
    on_startup,
)


@pytest.fixture
def mock_settings() -> MagicMock:
    settings = MagicMock()
    settings.telegram_bot_token.get_secret_value.return_value = "123:ABC"
    settings.railway_public_url = "https://test.up.railway.app"
    settings.telegram_webhook_secret.get_secret_value.return_value = "secret123"
    settings.supabase_url = "https://test.supabase.co"
    settings.supabase_key.get_secret_value.return_value = "key123"
    settings.upstash_redis_url = "https://test.upstash.io"
    settings.upstash_redis_token.get_secret_value.return_value = "token123"
    settings.openrouter_api_key.get_secret_value.return_value = "or-key"
    settings.generation_model = "google/gemini-2.5-flash"
    settings.generation_timeout = 30.0
    settings.profile_lock_ttl = 60
    settings.sentry_dsn = ""
    return settings


@pytest.fixture
def redis() -> AsyncMock:
    mock = AsyncMock()
    mock.incr = AsyncMock(return_value=1)
    mock.expire = AsyncMock(return_value=True)
    return mock


def _error_event(exc: Exception, with_message: bool = True) -> MagicMock:
    update = MagicMock(spec=Update)
    update.message = AsyncMock() if with_message else None
    event = MagicMock(spec=ErrorEvent)
    event.exception = exc
    event.update = update
    return event


class TestCreateBot:
    def test_uses_html_parse_mode(self, mock_settings: MagicMock) -> None:
        bot = create_bot(mock_settings)
        assert bot.default.parse_mode == "HTML"


class TestCreateHttpClient:
    def test_creates_httpx_client(self) -> None:
        client = create_http_client(12.0)
        assert isinstance(client, httpx.AsyncClient)
        assert client.timeout.read == 12.0
        assert client.timeout.connect == 5.0


class TestCreateDispatcher:
    def test_returns_dispatcher(self, redis: AsyncMock) -> None:
        assert isinstance(create_dispatcher(redis), Dispatcher)

    def test_inner_middleware_registered_on_message(self, redis: AsyncMock) -> None:
        dp = create_dispatcher(redis)
        # Throttling, Logging
        assert len(dp.message.middleware) == 2

    def test_error_handler_registered(self, redis: AsyncMock) -> None:
        dp = create_dispatcher(redis)
        assert len(dp.errors.handlers) > 0


class TestGlobalErrorHandler:
    async def test_handles_generic_exception(self) -> None:
        event = _error_event(RuntimeError("test error"))

        with patch("bot.main.sentry_sdk"):
            result = await _global_error_handler(event)

        assert result is True
        event.update.message.answer.assert_called_once_with("Something went wrong. Please try again later.")

    async def test_app_error_uses_user_message(self) -> None:
        event = _error_event(UnknownPlanError("platinum"))

        with patch("bot.main.sentry_sdk"):
            await _global_error_handler(event)

        event.update.message.answer.assert_called_once_with(event.exception.user_message)

    async def test_profile_busy_is_not_reported(self) -> None:
        event = _error_event(ProfileBusyError())

        with patch("bot.main.sentry_sdk") as mock_sentry:
            await _global_error_handler(event)
            mock_sentry.capture_exception.assert_not_called()

        event.update.message.answer.assert_called_once_with(ProfileBusyError().user_message)

    async def test_captures_sentry_exception(self) -> None:
        event = _error_event(AIGenerationError(), with_message=False)

        with patch("bot.main.sentry_sdk") as mock_sentry:
            result = await _global_error_handler(event)
            mock_sentry.capture_exception.assert_called_once_with(event.exception)
        assert result is True

    async def test_handles_no_update(self) -> None:
        event = MagicMock(spec=ErrorEvent)
        event.exception = RuntimeError("test")
        event.update = None

        with patch("bot.main.sentry_sdk"):
            assert await _global_error_handler(event) is True


class TestLifecycle:
    async def test_startup_sets_webhook(self, mock_settings: MagicMock) -> None:
        bot = AsyncMock()
        await on_startup(bot, mock_settings)
        bot.set_webhook.assert_awaited_once_with(
            url="https://test.up.railway.app/webhook",
            secret_token="secret123",
            allowed_updates=["message"],
        )

    async def test_startup_without_url_skips_webhook(self, mock_settings: MagicMock) -> None:
        mock_settings.railway_public_url = ""
        bot = AsyncMock()
        await on_startup(bot, mock_settings)
        bot.set_webhook.assert_not_awaited()

    async def test_shutdown_closes_clients(self) -> None:
        bot = MagicMock()
        bot.session.close = AsyncMock()
        db = AsyncMock()
        http_client = AsyncMock()

        await on_shutdown(bot, db, http_client)

        bot.session.close.assert_awaited_once()
        http_client.aclose.assert_awaited_once()
        db.close.assert_awaited_once()
        bot.delete_webhook.assert_not_called()


class TestCreateApp:
    def test_registers_routes_and_shared_clients(self, mock_settings: MagicMock) -> None:
        with (
            patch("bot.main.get_settings", return_value=mock_settings),
            patch("bot.main.structlog.configure"),
            patch("routers.setup_routers", return_value=Router()),
            patch("bot.main.ConversationService") as service_cls,
        ):
            app = create_app()

        paths = {resource.canonical for resource in app.router.resources()}
        assert "/webhook" in paths
        assert "/api/health" in paths
        assert app["settings"] is mock_settings
        assert {"db", "redis", "http_client", "bot"} <= set(app.keys())
        assert service_cls.call_args.kwargs["lock_ttl"] == 60

    def test_initializes_sentry_when_configured(self, mock_settings: MagicMock) -> None:
        mock_settings.sentry_dsn = "https://key@sentry.example.com/1"
        with (
            patch("bot.main.get_settings", return_value=mock_settings),
            patch("bot.main.structlog.configure"),
            patch("routers.setup_routers", return_value=Router()),
            patch("bot.main.sentry_sdk") as mock_sentry,
        ):
            create_app()
        mock_sentry.init.assert_called_once()
