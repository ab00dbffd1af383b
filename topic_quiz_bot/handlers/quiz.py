import logging
from aiogram import Router, F
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import Message

from topic_quiz_bot.errors import InvalidStateError, QuizError
from topic_quiz_bot.keyboards import (
    build_answers_keyboard,
    build_next_keyboard,
    build_remove_keyboard,
    build_start_keyboard,
)
from topic_quiz_bot.services.generator import QuestionGenerator
from topic_quiz_bot.services.registry import SessionRegistry
from topic_quiz_bot.services.session import QuizSession
from topic_quiz_bot.services.texts import (
    NAVIGATION_BUTTONS,
    ask_topic_again_text,
    escape_md,
    failure_text,
    feedback_text,
    next_hint_text,
    question_text,
    ready_text,
    restart_hint_text,
    session_error_text,
    summary_text,
    text_only_text,
)
from topic_quiz_bot.states import SessionState

router = Router()


@router.message(F.text)
async def handle_text(
    msg: Message, registry: SessionRegistry, generator: QuestionGenerator
) -> None:
    """Route a text message by the state of the chat's quiz session."""
    chat_id = msg.chat.id
    logging.debug(f"Received message from chat {chat_id}: {msg.text!r}")

    async with registry.lock(chat_id):
        session = registry.get_or_create(chat_id)
        try:
            if session.state is SessionState.empty:
                await build_quiz(msg, session, registry, generator)
            elif msg.text.strip() in NAVIGATION_BUTTONS:
                await ask_question(msg, session)
            else:
                await check_answer(msg, session, registry)
        except InvalidStateError:
            logging.exception(f"Invalid session state in chat {chat_id}")
            registry.reset(chat_id)
            await msg.answer(session_error_text(), reply_markup=build_remove_keyboard())


async def build_quiz(
    msg: Message,
    session: QuizSession,
    registry: SessionRegistry,
    generator: QuestionGenerator,
) -> None:
    """Treat the message as a topic and generate questions for it."""
    topic = msg.text.strip()
    if not topic:
        await msg.answer(ask_topic_again_text())
        return

    logging.info(f"Chat {msg.chat.id} provided topic: {topic!r}")

    async def notify(text: str) -> None:
        await msg.answer(escape_md(text), reply_markup=build_remove_keyboard())

    try:
        questions = await generator.generate(topic, notify=notify)
        session.attach_questions(questions, topic=topic)
    except InvalidStateError:
        raise
    except QuizError as e:
        logging.warning(f"Could not build quiz for topic {topic!r}: {e}")
        registry.reset(msg.chat.id)
        await msg.answer(failure_text(topic))
        return

    await msg.answer(
        ready_text(topic, session.total), reply_markup=build_start_keyboard()
    )


async def ask_question(msg: Message, session: QuizSession) -> None:
    """Send the current question with a keyboard of answer letters."""
    view = session.current_question_view()
    keyboard = build_answers_keyboard(view.letters)
    logging.info(f"Sending question {view.number}/{view.total} to chat {msg.chat.id}")

    try:
        await msg.answer(question_text(view), reply_markup=keyboard)
    except TelegramBadRequest as e:
        logging.warning(f"Error sending question: {e}")
        # Fallback to plain text
        await msg.answer(view.text[:4000], reply_markup=keyboard, parse_mode=None)


async def check_answer(
    msg: Message, session: QuizSession, registry: SessionRegistry
) -> None:
    """Score the message as an answer letter and move on."""
    chat_id = msg.chat.id
    logging.info(f"Chat {chat_id} selected answer: {msg.text!r}")
    result = session.submit_answer(msg.text)
    await msg.answer(feedback_text(result))

    if not session.is_complete():
        await msg.answer(next_hint_text(), reply_markup=build_next_keyboard())
        return

    logging.info(
        f"Quiz completed for chat {chat_id}. Score: {session.score}/{session.total}"
    )
    await msg.answer(
        summary_text(session.score, session.total, session.results),
        reply_markup=build_remove_keyboard(),
    )
    await msg.answer(restart_hint_text())
    registry.remove(chat_id)


@router.message()
async def handle_other(msg: Message) -> None:
    """Handle stickers, photos and other non-text messages."""
    await msg.answer(text_only_text())
