"""Configuration settings using pydantic-settings."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Telegram Bot
    BOT_TOKEN: str = Field(default="", description="Telegram Bot API token")

    # Database
    DATABASE_PATH: str = Field(
        default="data/quiz_bot.db",
        description="Path to SQLite database file"
    )

    # Encryption
    ENCRYPTION_KEY: str = Field(
        default="",
        description="Fernet encryption key for stored API keys"
    )

    # Chat-completion API
    LLM_BASE_URL: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the OpenAI-compatible chat-completion API"
    )
    LLM_MODEL: str = Field(default="gpt-3.5-turbo", description="Model name")
    LLM_TEMPERATURE: float = Field(default=0.7, description="Sampling temperature")

    # Offline generator
    MOCK_DELAY_SECONDS: float = Field(
        default=1.5,
        description="Simulated latency of the offline question generator"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )


# Global settings instance
settings = Settings()

CREDENTIAL_NAME = "openai_api_key"

QUESTION_COUNTS = [5, 10, 15, 20]
