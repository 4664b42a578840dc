"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")
    spacy_model: str = Field(default="en_core_web_sm", alias="SPACY_MODEL")
    recipient_prepositions: list[str] = Field(
        default_factory=lambda: ["to", "a", "para"],
        alias="RECIPIENT_PREPOSITIONS",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("spacy_model")
    @classmethod
    def validate_spacy_model(cls, value: str) -> str:
        """Validate that a spaCy model name or path is given."""

        value = value.strip()
        if not value:
            raise ValueError("SPACY_MODEL must not be empty")
        return value

    @field_validator("recipient_prepositions")
    @classmethod
    def validate_recipient_prepositions(cls, value: list[str]) -> list[str]:
        """Lower-case and de-duplicate prepositions, keeping their order.

        An empty list is rejected: the preposition scan is the last recipient fallback.
        """

        cleaned: list[str] = []
        for item in value:
            word = item.strip().lower()
            if word and word not in cleaned:
                cleaned.append(word)
        if not cleaned:
            raise ValueError("RECIPIENT_PREPOSITIONS must contain at least one word")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported LOG_LEVEL: {value}")
        return level


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        # Raising here is fine: caller can decide how to handle startup errors.
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
