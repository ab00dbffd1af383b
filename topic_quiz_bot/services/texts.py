import re

from topic_quiz_bot.services.session import AnswerResult, QuestionView

START_BUTTON = "Начать"
NEXT_BUTTON = "Дальше"
NAVIGATION_BUTTONS = (START_BUTTON, NEXT_BUTTON)

# Plain text, escaped by the sender
WAIT_TEXT = "Генерирую викторину, это может занять до 1 минуты ⏳"

# Results longer than this are summarised by score only
MAX_SUMMARY_LINES = 20


def escape_md(text: str) -> str:
    """Escape special characters for MarkdownV2."""
    return re.sub(r"([_*\[\]()~`>#+\-=|{}.!\\])", r"\\\1", text)


def start_text() -> str:
    return "Привет\\! 👋\nВведите тему викторины:"


def ask_topic_again_text() -> str:
    return "Введите тему викторины текстом:"


def ready_text(topic: str, total: int) -> str:
    return (
        f"📚 Викторина по теме *{escape_md(topic)}* готова\\!\n"
        f"Вопросов: {total}\n\n"
        f"Нажмите «{START_BUTTON}», чтобы начать\\."
    )


def failure_text(topic: str) -> str:
    return (
        f"😔 Не удалось получить вопросы по теме *{escape_md(topic)}*\\.\n"
        "Попробуйте другую тему\\."
    )


def question_text(view: QuestionView) -> str:
    options = "\n".join(
        f"{escape_md(letter)}\\) {escape_md(text)}" for letter, text in view.options
    )
    return (
        f"❓ _Вопрос {view.number} из {view.total}_\n\n"
        f"*{escape_md(view.title)}*\n\n"
        f"{options}"
    )


def feedback_text(result: AnswerResult) -> str:
    if result.correct:
        text = "✅ Правильно\\! 🎉"
    else:
        text = (
            "❌ Неверно\\. 😞\n"
            f"Правильный ответ: *{escape_md(result.correct_letter)}\\) "
            f"{escape_md(result.correct_text)}*"
        )
    if result.explanation:
        text += f"\n\n{escape_md(result.explanation)}"
    return text


def next_hint_text() -> str:
    return f"Нажмите «{NEXT_BUTTON}» для следующего вопроса\\."


def summary_text(score: int, total: int, results: list[AnswerResult]) -> str:
    text = (
        "🏁 *Викторина завершена\\!*\n"
        f"✨ Ваш результат: *{score}* из *{total}*\\."
    )
    if len(results) <= MAX_SUMMARY_LINES:
        lines = []
        for i, result in enumerate(results, start=1):
            mark = "✅" if result.correct else "❌"
            title = result.question.title.splitlines()[0][:50]
            lines.append(f"{mark} *Вопрос {i}:* {escape_md(title)}")
        if lines:
            text += "\n\n" + "\n".join(lines)
    return text


def restart_hint_text() -> str:
    return "Нажмите /start, чтобы начать новую викторину\\."


def session_error_text() -> str:
    return "⚠️ Что\\-то пошло не так\\. Введите тему викторины заново:"


def text_only_text() -> str:
    return "Пожалуйста, отправьте текстовое сообщение\\."
