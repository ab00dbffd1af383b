import logging
from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from topic_quiz_bot.keyboards import build_remove_keyboard
from topic_quiz_bot.services.registry import SessionRegistry
from topic_quiz_bot.services.texts import start_text

router = Router()


@router.message(Command("start"))
async def cmd_start(msg: Message, registry: SessionRegistry) -> None:
    """Handle /start command - drop any quiz and ask for a topic."""
    chat_id = msg.chat.id
    async with registry.lock(chat_id):
        registry.reset(chat_id)
        logging.info(f"Chat {chat_id} started a new quiz")
        await msg.answer(start_text(), reply_markup=build_remove_keyboard())
