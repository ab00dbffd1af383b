"""
Tests for the question document parser.
"""

import pytest

from topic_quiz_bot.errors import MalformedDocumentError
from topic_quiz_bot.services.parser import QuestionSetParser

from conftest import document, question_xml


@pytest.fixture
def parser():
    return QuestionSetParser()


class TestWellFormedDocuments:
    """Tests for documents the model got right."""

    def test_parses_all_questions_in_order(self, parser):
        """Test every question is kept in document order."""
        text = document(
            question_xml("Первый", correct="A"),
            question_xml("Второй", correct="C"),
            question_xml("Третий", correct="D"),
        )
        result = parser.parse(text)

        assert [q.title for q in result.questions] == ["Первый", "Второй", "Третий"]
        assert [q.correct_answer.letter for q in result.questions] == ["A", "C", "D"]
        assert result.skipped == []

    def test_fields(self, parser):
        """Test answers, flags and explanation are read."""
        result = parser.parse(document(question_xml("Вопрос", correct="B")))
        question = result.questions[0]

        assert [a.letter for a in question.answers] == ["A", "B", "C", "D"]
        assert [a.text for a in question.answers] == [
            "Ответ A", "Ответ B", "Ответ C", "Ответ D"
        ]
        assert [a.correct for a in question.answers] == [False, True, False, False]
        assert question.explanation == "Потому что так и есть"

    def test_whitespace_trimmed(self, parser):
        """Test title, answer text and explanation are stripped."""
        text = """
        <questions>
          <question>
            <title>
               Что такое Python? 🐍
            </title>
            <answers>
              <answer letter="a" correct="TRUE">  Язык программирования  </answer>
              <answer letter="b" correct="false"> Змея </answer>
              <answer letter="c" correct="false"> Сыр </answer>
              <answer letter="d" correct="false"> Город </answer>
            </answers>
            <explanation>
              Это язык.
            </explanation>
          </question>
        </questions>
        """
        question = parser.parse(text).questions[0]

        assert question.title == "Что такое Python? 🐍"
        assert question.answers[0].text == "Язык программирования"
        assert question.answers[0].letter == "A"
        assert question.correct_answer.letter == "A"
        assert question.explanation == "Это язык."

    def test_missing_explanation_is_empty(self, parser):
        """Test a question without explanation is still accepted."""
        text = document(question_xml("Без объяснения").replace(
            "<explanation>Потому что так и есть</explanation>", ""
        ))
        question = parser.parse(text).questions[0]

        assert question.explanation == ""

    def test_code_fence_and_prose_ignored(self, parser):
        """Test a document wrapped in Markdown and chatter is found."""
        text = (
            "Конечно! Вот ваша викторина:\n```xml\n"
            + document(question_xml("Вопрос"))
            + "\n```\nУдачи!"
        )
        result = parser.parse(text)

        assert len(result.questions) == 1

    def test_no_questions(self, parser):
        """Test an empty but valid document yields nothing."""
        result = parser.parse("<questions></questions>")

        assert result.questions == ()
        assert result.skipped == []

    def test_parse_is_deterministic(self, parser):
        """Test parsing the same text twice gives equal sets."""
        text = document(question_xml("Один", correct="B"), question_xml("Два"))

        assert parser.parse(text).questions == parser.parse(text).questions


class TestMalformedQuestions:
    """Tests for skipping individual bad questions."""

    def test_malformed_question_skipped_order_kept(self, parser):
        """Test one broken question among good ones is dropped."""
        broken = "<question><answers></answers></question>"
        text = document(
            question_xml("Первый"),
            broken,
            question_xml("Третий"),
            question_xml("Четвёртый"),
        )
        result = parser.parse(text)

        assert [q.title for q in result.questions] == ["Первый", "Третий", "Четвёртый"]
        assert len(result.skipped) == 1
        assert result.skipped[0].index == 2

    def test_two_correct_answers_dropped(self, parser):
        """Test a question with two correct answers is dropped."""
        text = document(
            question_xml("Хороший"),
            question_xml("Два правильных", correct="AB"),
        )
        result = parser.parse(text)

        assert [q.title for q in result.questions] == ["Хороший"]
        assert "one correct" in result.skipped[0].reason

    def test_no_correct_answer_dropped(self, parser):
        """Test a question without a correct answer is dropped."""
        text = document(question_xml("Ни одного", correct=""), question_xml("Хороший"))
        result = parser.parse(text)

        assert [q.title for q in result.questions] == ["Хороший"]

    def test_wrong_answer_count_dropped(self, parser):
        """Test a question with three options is dropped."""
        text = document(question_xml("Три варианта", letters="ABC"))
        result = parser.parse(text)

        assert result.questions == ()
        assert "expected 4 answers" in result.skipped[0].reason

    def test_duplicate_letters_dropped(self, parser):
        """Test repeated letters are rejected."""
        text = document(question_xml("Повтор", letters="AABC"))

        assert parser.parse(text).questions == ()

    def test_unknown_letter_dropped(self, parser):
        """Test letters outside the alphabet are rejected."""
        text = document(question_xml("Буква E", letters="ABCE"))

        assert parser.parse(text).questions == ()

    def test_missing_letter_dropped(self, parser):
        """Test an answer without a letter attribute is rejected."""
        text = document(
            question_xml("Без буквы").replace('letter="D" ', ""),
            question_xml("Хороший"),
        )
        result = parser.parse(text)

        assert [q.title for q in result.questions] == ["Хороший"]

    def test_blank_title_dropped(self, parser):
        """Test a question with an empty title is rejected."""
        text = document(question_xml("   "), question_xml("Хороший"))

        assert [q.title for q in parser.parse(text).questions] == ["Хороший"]

    def test_custom_alphabet(self):
        """Test a parser configured for two options."""
        parser = QuestionSetParser(letters=["a", "b"])
        text = document(question_xml("Да или нет", correct="B", letters="AB"))

        assert parser.parse(text).questions[0].correct_answer.letter == "B"


class TestMalformedDocuments:
    """Tests for documents that are not XML at all."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "Извините, я не могу это сделать.",
            "<questions><question><title>Оборвано",
            "<questions><question></questions>",
        ],
    )
    def test_raises(self, parser, text):
        """Test non-XML text raises MalformedDocumentError."""
        with pytest.raises(MalformedDocumentError):
            parser.parse(text)
