from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# Letters offered for answer options, in display order
ANSWER_LETTERS = ("A", "B", "C", "D")


class Answer(BaseModel):
    """One lettered answer option."""

    model_config = ConfigDict(frozen=True)

    letter: str
    text: str
    correct: bool = False

    @field_validator("letter")
    @classmethod
    def normalize_letter(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 1 or not value.isalpha():
            raise ValueError(f"invalid answer letter: {value!r}")
        return value

    @field_validator("text")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("answer text is empty")
        return value


class Question(BaseModel):
    """A multiple-choice question with exactly one correct answer."""

    model_config = ConfigDict(frozen=True)

    title: str
    answers: tuple[Answer, ...]
    explanation: str = ""

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question title is empty")
        return value

    @field_validator("explanation")
    @classmethod
    def strip_explanation(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def check_answers(self) -> "Question":
        letters = [a.letter for a in self.answers]
        if len(set(letters)) != len(letters):
            raise ValueError(f"duplicate answer letters: {letters}")
        correct_count = sum(1 for a in self.answers if a.correct)
        if correct_count != 1:
            raise ValueError(f"expected one correct answer, got {correct_count}")
        return self

    @property
    def correct_answer(self) -> Answer:
        return next(a for a in self.answers if a.correct)

    def find_answer(self, letter: str):
        """Return the answer with the given letter, or None."""
        for answer in self.answers:
            if answer.letter == letter:
                return answer
        return None


# Ordered, immutable sequence of parsed questions
QuestionSet = tuple[Question, ...]
