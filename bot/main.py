"""Bot startup: webhook, middleware chain, client lifecycle."""

import logging

import httpx
import sentry_sdk
import structlog
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import ErrorEvent
from aiohttp import web

from bot.config import Settings, get_settings
from bot.exceptions import AppError, ProfileBusyError
from bot.middlewares import LoggingMiddleware, ThrottlingMiddleware
from cache.client import RedisClient
from db.client import SupabaseClient
from db.repositories import ProfilesRepository
from services.ai.client import GenerationClient
from services.content import ContentGenerator
from services.conversation import ConversationService

log = structlog.get_logger()

_DEFAULT_ERROR_MESSAGE = AppError().user_message


def _init_sentry(dsn: str) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if dsn:
        sentry_sdk.init(dsn=dsn, traces_sample_rate=0.1)
        log.info("sentry_initialized")


def _configure_logging() -> None:
    """JSON log lines with ISO timestamps (one line per event for the platform log viewer)."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_bot(settings: Settings) -> Bot:
    """Create Bot instance with HTML parse mode."""
    return Bot(
        token=settings.telegram_bot_token.get_secret_value(),
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )


def create_http_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """Shared httpx client for the generation API and health checks."""
    return httpx.AsyncClient(
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        timeout=httpx.Timeout(timeout, connect=5.0),
    )


def create_dispatcher(redis: RedisClient) -> Dispatcher:
    """Create Dispatcher with the middleware chain and the global error handler.

    No FSM storage: conversation state lives in the user profile.
    """
    dp = Dispatcher()

    # Throttling first so dropped messages are not logged as handled
    dp.message.middleware(ThrottlingMiddleware(redis))
    dp.message.middleware(LoggingMiddleware())

    dp.errors.register(_global_error_handler)

    return dp


async def _global_error_handler(event: ErrorEvent) -> bool:
    """Catch all unhandled exceptions: log + Sentry capture + notify user.

    No state is written on this path; the service persists only after a
    successful transition.
    """
    exc = event.exception

    if isinstance(exc, ProfileBusyError):
        log.warning("profile_busy", exception=str(exc))
    else:
        sentry_sdk.capture_exception(exc)
        log.error("unhandled_error", exception=str(exc), exc_info=exc)

    user_message = exc.user_message if isinstance(exc, AppError) else _DEFAULT_ERROR_MESSAGE

    update = event.update
    if update and update.message:
        await update.message.answer(user_message)

    return True  # error handled, don't propagate


async def on_startup(bot: Bot, settings: Settings) -> None:
    """Set webhook on startup."""
    url = settings.railway_public_url
    if url:
        await bot.set_webhook(
            url=f"{url}/webhook",
            secret_token=settings.telegram_webhook_secret.get_secret_value(),
            allowed_updates=["message"],
        )
        log.info("webhook_set", url=url)
    else:
        log.warning("no_railway_url", msg="RAILWAY_PUBLIC_URL not set, webhook not configured")


async def on_shutdown(
    bot: Bot,
    db: SupabaseClient,
    http_client: httpx.AsyncClient,
) -> None:
    """Close shared clients.

    The webhook is left in place: during a zero-downtime deploy the new
    container has already registered it.
    """
    log.info("shutdown_started")
    await bot.session.close()
    await http_client.aclose()
    await db.close()
    # Redis (Upstash HTTP) is stateless, nothing to close
    log.info("shutdown_complete")


def create_app() -> web.Application:
    """Create aiohttp application with webhook handler.

    Entry point for Railway deployment.
    """
    from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application

    from api.health import health_handler
    from routers import setup_routers

    settings = get_settings()

    _configure_logging()
    _init_sentry(settings.sentry_dsn)

    db = SupabaseClient(
        url=settings.supabase_url,
        key=settings.supabase_key.get_secret_value(),
    )
    redis = RedisClient(
        url=settings.upstash_redis_url,
        token=settings.upstash_redis_token.get_secret_value(),
    )
    http_client = create_http_client(settings.generation_timeout)
    bot = create_bot(settings)
    dp = create_dispatcher(redis)
    dp.include_router(setup_routers())

    generation_client = GenerationClient(
        http_client=http_client,
        api_key=settings.openrouter_api_key.get_secret_value(),
        model=settings.generation_model,
        timeout=settings.generation_timeout,
        site_url=settings.railway_public_url,
    )
    conversation_service = ConversationService(
        store=ProfilesRepository(db),
        redis=redis,
        generator=ContentGenerator(generation_client),
        lock_ttl=settings.profile_lock_ttl,
    )

    # Inject services into dp.workflow_data for routers
    dp.workflow_data["conversation_service"] = conversation_service

    async def _startup() -> None:
        await on_startup(bot, settings)

    async def _shutdown() -> None:
        await on_shutdown(bot, db, http_client)

    dp.startup.register(_startup)
    dp.shutdown.register(_shutdown)

    app = web.Application()
    webhook_handler = SimpleRequestHandler(
        dispatcher=dp,
        bot=bot,
        secret_token=settings.telegram_webhook_secret.get_secret_value(),
    )
    webhook_handler.register(app, path="/webhook")
    setup_application(app, dp, bot=bot)

    # Shared clients for API handlers
    app["db"] = db
    app["redis"] = redis
    app["http_client"] = http_client
    app["bot"] = bot
    app["settings"] = settings

    app.router.add_get("/api/health", health_handler)

    return app
