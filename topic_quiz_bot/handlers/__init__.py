from aiogram import Router

from topic_quiz_bot.handlers.start import router as start_router
from topic_quiz_bot.handlers.quiz import router as quiz_router


def setup_routers() -> Router:
    """Build the root router for all quiz handlers."""
    router = Router()
    # /start must match before the catch-all text handler
    router.include_router(start_router)
    router.include_router(quiz_router)
    return router


__all__ = ["setup_routers"]
