from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv  # pip install python-dotenv
import os

# ищем файл, имя приходит из переменной или берём .env
env_file = os.getenv("ENV_FILE", ".env")
load_dotenv(Path(__file__).parent.parent / env_file)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_QUESTION_COUNT = 10


@dataclass(frozen=True)
class Settings:
    """Read-only settings shared by the whole process."""

    bot_token: Optional[str]
    openai_api_key: Optional[str]
    env: str = "dev"
    openai_base_url: str = DEFAULT_BASE_URL
    openai_model: str = DEFAULT_MODEL
    question_count: int = DEFAULT_QUESTION_COUNT
    max_tokens: int = 4000
    temperature: float = 0.7
    log_level: str = "DEBUG"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        env = os.getenv("ENV", "dev").lower()
        if env == "prod":
            bot_token = os.getenv("BOT_TOKEN_PROD")
        else:
            bot_token = os.getenv("BOT_TOKEN_DEV")

        raw_count = os.getenv("QUESTION_COUNT", str(DEFAULT_QUESTION_COUNT))
        try:
            question_count = int(raw_count)
        except ValueError:
            raise ValueError(f"QUESTION_COUNT must be an integer, got {raw_count!r}")
        if question_count < 1:
            raise ValueError(f"QUESTION_COUNT must be positive, got {question_count}")

        return cls(
            bot_token=bot_token or os.getenv("BOT_TOKEN"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            env=env,
            openai_base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            openai_model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
            question_count=question_count,
            log_level=os.getenv("LOG_LEVEL", "DEBUG").upper(),
        )

    def validate(self) -> None:
        """Fail fast when a required secret is missing."""
        if not self.bot_token:
            raise RuntimeError(f"❌ Не задан токен для окружения ENV={self.env}")
        if not self.openai_api_key:
            raise RuntimeError("❌ Не задан OPENAI_API_KEY")
