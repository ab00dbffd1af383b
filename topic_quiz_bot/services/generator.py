"""
Question generation via an OpenAI-compatible chat completions API.

The request is a single long call (up to about a minute), so callers pass a
``notify`` coroutine that is awaited with a wait notice before the request
is sent.
"""

import logging
from typing import Awaitable, Callable, Optional

import httpx

from topic_quiz_bot.config import Settings
from topic_quiz_bot.errors import EmptyGenerationError, GenerationServiceError
from topic_quiz_bot.models import ANSWER_LETTERS, QuestionSet
from topic_quiz_bot.services.parser import QuestionSetParser
from topic_quiz_bot.services.texts import WAIT_TEXT

Notify = Callable[[str], Awaitable[object]]

SYSTEM_PROMPT = (
    "You are a helpful assistant that writes multiple-choice quiz questions "
    "in Russian. You answer with a single XML document and nothing else."
)

USER_PROMPT_TEMPLATE = """\
Write {count} multiple-choice quiz questions in Russian about the topic: "{topic}".
Return them as XML with exactly this structure:
<questions>
  <question>
    <title>Текст вопроса</title>
    <answers>
{answers}
    </answers>
    <explanation>Объяснение правильного ответа</explanation>
  </question>
  ...
</questions>

Rules:
- Every question has {letter_count} different answer options lettered {letters}.
- Exactly one answer per question is marked correct="true", all others correct="false".
- The explanation says in Russian why the correct answer is correct.
- Questions must be specific and accurate; do not repeat questions or explanations.
- Add emojis where they fit.

Output only the XML. No Markdown, no code blocks, no text before or after it.
"""


def build_prompt(topic: str, count: int) -> str:
    """Build the user prompt for a topic and target question count."""
    answers = "\n".join(
        f'      <answer letter="{letter}" correct="{"true" if i == 2 else "false"}">'
        f"Вариант ответа {i + 1}</answer>"
        for i, letter in enumerate(ANSWER_LETTERS)
    )
    return USER_PROMPT_TEMPLATE.format(
        count=count,
        topic=topic,
        answers=answers,
        letter_count=len(ANSWER_LETTERS),
        letters=", ".join(ANSWER_LETTERS),
    )


class QuestionGenerator:
    """Generate a question set for a topic using the chat completions API."""

    def __init__(
        self,
        settings: Settings,
        parser: Optional[QuestionSetParser] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings
        self._parser = parser or QuestionSetParser()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"Bearer {self._settings.openai_api_key}",
                    "Content-Type": "application/json",
                },
                timeout=120.0,
            )
        return self._client

    def build_request(self, topic: str, count: int) -> dict:
        """Build the chat completions payload."""
        return {
            "model": self._settings.openai_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(topic, count)},
            ],
            "max_tokens": self._settings.max_tokens,
            "temperature": self._settings.temperature,
            "n": 1,
        }

    async def generate(
        self, topic: str, count: Optional[int] = None, notify: Optional[Notify] = None
    ) -> QuestionSet:
        """
        Generate questions for a topic.

        Args:
            topic: Free-text quiz topic
            count: Target number of questions (defaults to settings)
            notify: Awaited with the wait notice before the request is sent

        Returns:
            Non-empty tuple of parsed questions

        Raises:
            GenerationServiceError: Service unreachable, error status or bad envelope
            MalformedDocumentError: Generated text is not well-formed XML
            EmptyGenerationError: No usable questions in the generated text
        """
        count = count or self._settings.question_count
        payload = self.build_request(topic, count)
        client = self._get_client()
        url = f"{self._settings.openai_base_url}/chat/completions"

        if notify is not None:
            await notify(WAIT_TEXT)

        logging.info(f"Requesting {count} questions for topic {topic!r}")
        try:
            response = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise GenerationServiceError(f"Generation service unreachable: {e}")
        logging.info(f"Generation service responded with status {response.status_code}")

        content = self._extract_content(response)
        logging.debug(f"Generated document:\n{content}")

        result = self._parser.parse(content)
        if result.skipped:
            logging.warning(
                f"Skipped {len(result.skipped)} malformed questions for topic {topic!r}"
            )
        if not result.questions:
            raise EmptyGenerationError(f"No questions generated for topic {topic!r}")
        logging.info(f"Generated {len(result.questions)} questions for topic {topic!r}")
        return result.questions

    def _extract_content(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = _error_message(data) or response.text or response.reason_phrase
            logging.error(f"Generation service error: {message}")
            raise GenerationServiceError(message, status_code=response.status_code)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str):
            logging.error(f"Unexpected generation response: {response.text[:500]}")
            raise GenerationServiceError(
                "malformed response", status_code=response.status_code
            )
        return content

    async def aclose(self) -> None:
        """Close the HTTP client if this generator created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def _error_message(data) -> Optional[str]:
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return None
