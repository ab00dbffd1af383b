from topic_quiz_bot.keyboards.builders import (
    build_start_keyboard,
    build_next_keyboard,
    build_answers_keyboard,
    build_remove_keyboard,
)

__all__ = [
    "build_start_keyboard",
    "build_next_keyboard",
    "build_answers_keyboard",
    "build_remove_keyboard",
]
