import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Sequence

from pydantic import ValidationError

from topic_quiz_bot.errors import MalformedDocumentError
from topic_quiz_bot.models import ANSWER_LETTERS, Answer, Question, QuestionSet

# Models sometimes wrap the document in a Markdown fence or add prose around it
DOCUMENT_RE = re.compile(r"<questions\b.*</questions\s*>", re.DOTALL)


@dataclass(frozen=True)
class SkippedQuestion:
    """A question element that could not be turned into a Question."""

    index: int  # 1-based position in the document
    reason: str


@dataclass(frozen=True)
class ParseResult:
    questions: QuestionSet = ()
    skipped: list[SkippedQuestion] = field(default_factory=list)


class QuestionSetParser:
    """
    Parse the generator's XML document into validated questions.

    Malformed questions are skipped one by one; only a document that is not
    well-formed XML at all raises MalformedDocumentError.
    """

    def __init__(self, letters: Sequence[str] = ANSWER_LETTERS):
        self.letters = tuple(letter.upper() for letter in letters)

    def parse(self, text: str) -> ParseResult:
        root = self._load(text)

        questions: list[Question] = []
        skipped: list[SkippedQuestion] = []
        for index, element in enumerate(root.iter("question"), start=1):
            try:
                questions.append(self._parse_question(element))
            except (ValidationError, ValueError) as e:
                reason = _short_reason(e)
                skipped.append(SkippedQuestion(index=index, reason=reason))
                logging.warning(f"Skipping question {index}: {reason}")

        logging.debug(
            f"Parsed {len(questions)} questions, skipped {len(skipped)}"
        )
        return ParseResult(questions=tuple(questions), skipped=skipped)

    def _load(self, text: str) -> ET.Element:
        if not text or not text.strip():
            raise MalformedDocumentError("Document is empty")

        match = DOCUMENT_RE.search(text)
        document = match.group(0) if match else text.strip()
        try:
            return ET.fromstring(document)
        except ET.ParseError as e:
            raise MalformedDocumentError(f"Document is not well-formed XML: {e}")

    def _parse_question(self, element: ET.Element) -> Question:
        answers = tuple(
            Answer(
                letter=node.get("letter") or "",
                text=_text(node),
                correct=(node.get("correct") or "").strip().lower() == "true",
            )
            for node in element.findall("answers/answer")
        )
        question = Question(
            title=_text(element.find("title")),
            answers=answers,
            explanation=_text(element.find("explanation")),
        )

        letters = [a.letter for a in question.answers]
        if len(letters) != len(self.letters):
            raise ValueError(
                f"expected {len(self.letters)} answers, got {len(letters)}"
            )
        unknown = [letter for letter in letters if letter not in self.letters]
        if unknown:
            raise ValueError(f"unknown answer letters: {unknown}")
        return question


def _text(element) -> str:
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def _short_reason(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        return first.get("msg", str(error))
    return str(error)
