import logging
from dataclasses import dataclass
from typing import Optional

from topic_quiz_bot.errors import EmptyGenerationError, InvalidStateError
from topic_quiz_bot.models import Question, QuestionSet
from topic_quiz_bot.states import SessionState


@dataclass(frozen=True)
class QuestionView:
    """What the user sees for the current question."""

    number: int  # 1-based
    total: int
    title: str
    options: tuple[tuple[str, str], ...]  # (letter, text) in answer order

    @property
    def letters(self) -> list[str]:
        return [letter for letter, _ in self.options]

    @property
    def text(self) -> str:
        options = "\n".join(f"{letter}) {text}" for letter, text in self.options)
        return f"{self.title}\n\n{options}"


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of a single answer submission."""

    question: Question
    chosen: str
    correct: bool
    explanation: str

    @property
    def correct_letter(self) -> str:
        return self.question.correct_answer.letter

    @property
    def correct_text(self) -> str:
        return self.question.correct_answer.text


class QuizSession:
    """
    One user's quiz: the question set, a cursor and a score.

    Pure state machine without I/O. Moves EMPTY -> IN_PROGRESS on
    attach_questions() and IN_PROGRESS -> COMPLETE once the last question
    is answered.
    """

    def __init__(self) -> None:
        self._questions: QuestionSet = ()
        self._cursor = 0
        self._score = 0
        self._results: list[AnswerResult] = []
        self.topic: Optional[str] = None

    @property
    def state(self) -> SessionState:
        if not self._questions:
            return SessionState.empty
        if self._cursor < len(self._questions):
            return SessionState.in_progress
        return SessionState.complete

    @property
    def questions(self) -> QuestionSet:
        return self._questions

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def score(self) -> int:
        return self._score

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def results(self) -> list[AnswerResult]:
        return list(self._results)

    def is_complete(self) -> bool:
        return self.state is SessionState.complete

    def attach_questions(self, questions: QuestionSet, topic: Optional[str] = None) -> None:
        """Load a question set into an empty session."""
        if self._questions:
            raise InvalidStateError("Session already has questions")
        if not questions:
            raise EmptyGenerationError("No questions to attach")
        self._questions = tuple(questions)
        self.topic = topic

    def current_question_view(self) -> QuestionView:
        """Get the current question with its lettered options."""
        self._require_in_progress("current_question_view")
        question = self._questions[self._cursor]
        return QuestionView(
            number=self._cursor + 1,
            total=self.total,
            title=question.title,
            options=tuple((a.letter, a.text) for a in question.answers),
        )

    def submit_answer(self, letter: str) -> AnswerResult:
        """
        Score an answer for the current question and advance.

        Unknown letters count as a wrong answer rather than being rejected.
        """
        self._require_in_progress("submit_answer")
        question = self._questions[self._cursor]
        chosen = (letter or "").strip().upper()

        answer = question.find_answer(chosen)
        is_correct = answer is not None and answer.correct
        if is_correct:
            self._score += 1
        self._cursor += 1

        result = AnswerResult(
            question=question,
            chosen=chosen,
            correct=is_correct,
            explanation=question.explanation,
        )
        self._results.append(result)
        logging.debug(
            f"Answer {chosen!r} for question {self._cursor}/{self.total}: "
            f"{'correct' if is_correct else 'wrong'}"
        )
        return result

    def _require_in_progress(self, operation: str) -> None:
        state = self.state
        if state is not SessionState.in_progress:
            raise InvalidStateError(f"{operation}() called in state {state.value}")
