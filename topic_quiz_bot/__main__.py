import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand, BotCommandScopeDefault

from topic_quiz_bot.config import Settings
from topic_quiz_bot.handlers import setup_routers
from topic_quiz_bot.services.generator import QuestionGenerator
from topic_quiz_bot.services.registry import SessionRegistry


async def on_startup(bot: Bot) -> None:
    await bot.set_my_commands(
        [BotCommand(command="start", description="🦄 Начать новую викторину🦄")],
        scope=BotCommandScopeDefault(),
    )
    logging.info("Меню команд обновлено")


def build_dispatcher(
    registry: SessionRegistry, generator: QuestionGenerator
) -> Dispatcher:
    """Create the dispatcher with routers and shared services attached."""
    dp = Dispatcher(registry=registry, generator=generator)
    dp.include_router(setup_routers())
    dp.startup.register(on_startup)
    return dp


async def main() -> None:
    settings = Settings.from_env()
    settings.validate()
    logging.basicConfig(level=settings.log_level)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.MARKDOWN_V2),
    )
    generator = QuestionGenerator(settings)
    dp = build_dispatcher(SessionRegistry(), generator)

    logging.info(f"Starting bot (ENV={settings.env})")
    try:
        await dp.start_polling(bot)
    finally:
        await generator.aclose()
        await bot.session.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
