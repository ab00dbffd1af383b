from types import SimpleNamespace
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from topic_quiz_bot.config import Settings
from topic_quiz_bot.models import Answer, Question
from topic_quiz_bot.services.texts import WAIT_TEXT


def question_xml(
    title: str,
    correct: str = "A",
    letters: str = "ABCD",
    explanation: str = "Потому что так и есть",
) -> str:
    """Build one <question> element with the given correct letters."""
    answers = "\n".join(
        f'<answer letter="{letter}" correct="{"true" if letter in correct else "false"}">'
        f"Ответ {letter}</answer>"
        for letter in letters
    )
    return (
        "<question>"
        f"<title>{title}</title>"
        f"<answers>{answers}</answers>"
        f"<explanation>{explanation}</explanation>"
        "</question>"
    )


def document(*questions: str) -> str:
    return "<questions>" + "".join(questions) + "</questions>"


def make_question(title: str, correct: str = "A", explanation: str = "") -> Question:
    return Question(
        title=title,
        answers=tuple(
            Answer(letter=letter, text=f"Ответ {letter}", correct=letter == correct)
            for letter in "ABCD"
        ),
        explanation=explanation,
    )


class FakeMessage:
    """Just enough of aiogram's Message for calling handlers directly."""

    def __init__(self, chat_id: int, text: Optional[str]):
        self.chat = SimpleNamespace(id=chat_id)
        self.text = text
        self.answer = AsyncMock()

    @property
    def replies(self) -> list[str]:
        return [call.args[0] for call in self.answer.await_args_list]


class FakeGenerator:
    """Returns prepared question sets per topic, or raises."""

    def __init__(self, questions_by_topic=None, error: Optional[Exception] = None):
        self.questions_by_topic = questions_by_topic or {}
        self.error = error
        self.topics: list[str] = []

    async def generate(self, topic, count=None, notify=None):
        self.topics.append(topic)
        if notify is not None:
            await notify(WAIT_TEXT)
        if self.error is not None:
            raise self.error
        return self.questions_by_topic.get(topic, ())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bot_token="123:abc",
        openai_api_key="sk-test",
        openai_base_url="https://llm.test/v1",
        openai_model="test-model",
        question_count=3,
    )


@pytest.fixture
def two_questions():
    return (
        make_question("Столица Франции?", correct="B", explanation="Париж 🇫🇷"),
        make_question("Сколько будет 2+2?", correct="A", explanation="Четыре"),
    )
