from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove

from topic_quiz_bot.services.texts import NEXT_BUTTON, START_BUTTON


def build_start_keyboard() -> ReplyKeyboardMarkup:
    """Build keyboard with the button that shows the first question."""
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=START_BUTTON)]], resize_keyboard=True
    )


def build_next_keyboard() -> ReplyKeyboardMarkup:
    """Build keyboard with the button that shows the next question."""
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=NEXT_BUTTON)]], resize_keyboard=True
    )


def build_answers_keyboard(letters: list[str]) -> ReplyKeyboardMarkup:
    """Build keyboard with one button per answer letter."""
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=letter)] for letter in letters],
        resize_keyboard=True,
    )


def build_remove_keyboard() -> ReplyKeyboardRemove:
    """Hide the reply keyboard."""
    return ReplyKeyboardRemove(remove_keyboard=True)
