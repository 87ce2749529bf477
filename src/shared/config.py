"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Ollama (reference text-generation service)
    ollama_url: str = Field(default="http://localhost:11434")
    ollama_model: str = Field(default="llama3.2")
    ollama_timeout: int = Field(
        default=30000, gt=0, description="Chat request timeout in milliseconds"
    )

    # OpenAI-compatible endpoint (used when ai_provider == "openai")
    openai_api_key: SecretStr = Field(default=SecretStr(""))
    openai_base_url: Optional[str] = Field(default=None)
    openai_model: str = Field(default="gpt-4o-mini")

    # AI behaviour
    ai_provider: Literal["ollama", "openai"] = Field(default="ollama")
    use_mock_ai: bool = Field(
        default=False, description="Return canned outputs without calling the model"
    )
    ai_cover_letter_max_words: int = Field(default=250, gt=0)
    ai_locale: Literal["fr", "en"] = Field(default="fr", description="Prompt language")
    ai_probe_timeout: float = Field(
        default=5.0, gt=0, description="Availability probe timeout in seconds"
    )
    ai_retry_timeout: bool = Field(
        default=False, description="Apply the request timeout to the strict-prompt retry"
    )
    ai_max_connections: int = Field(default=10, gt=0)

    @property
    def timeout_seconds(self) -> float:
        """Request timeout converted to seconds."""
        return self.ollama_timeout / 1000

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
