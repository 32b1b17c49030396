"""
Configuración del bot.

Centralizes every configuration value the bot needs. Uses pydantic-settings
for type validation and environment variable handling, with `.env` support.

Supported environment variables:
- BOT_TOKEN: Telegram bot token. Required to start polling
- OPENROUTER_API_KEY: API key for the chat-completion API. Optional; without it
  the chat mode answers with a configuration error
- OPENROUTER_MODEL: Model identifier. Default: gpt-4o-mini
- OPENROUTER_BASE_URL: Base URL of the OpenAI-compatible API.
  Default: https://openrouter.ai/api/v1
- COMPLETION_TIMEOUT_SECONDS: Timeout for one completion call. Default: 30
- MAX_COMPLETION_CONCURRENCY: Concurrent completion calls. Default: 5
- CHAT_HISTORY_LIMIT: History entries sent as context. Default: 10
- CONCURRENT_UPDATES: Telegram updates processed concurrently. Default: 8
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR. Default: INFO
- LOG_FORMAT: json or text. Default: json
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Bot configuration with typed defaults."""

    # Telegram
    bot_token: Optional[str] = None
    concurrent_updates: int = Field(default=8, ge=1)

    # Completion API (OpenRouter, OpenAI-compatible)
    openrouter_api_key: Optional[str] = None
    openrouter_model: str = "gpt-4o-mini"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    completion_timeout_seconds: float = Field(default=30.0, gt=0)
    max_completion_concurrency: int = Field(default=5, ge=1)
    chat_history_limit: int = Field(default=10, ge=0)

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    service_name: str = "student-bot"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def completion_configured(self) -> bool:
        return bool(self.openrouter_api_key)


# Instancia global de configuración
settings = Settings()
