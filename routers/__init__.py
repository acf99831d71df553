"""Router setup: includes all sub-routers."""

from aiogram import Router

from routers import chat


def setup_routers() -> Router:
    """Create top-level router with all sub-routers included.

    chat.router is a catch-all, so it must stay last.
    """
    router = Router()
    router.include_router(chat.router)
    return router
