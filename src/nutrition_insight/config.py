"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrition_insight.services.prompts import DEFAULT_SYSTEM_PROMPT
from nutrition_insight.services.summaries import DEFAULT_MIN_SUMMARY_LENGTH

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    generative_model: str = "gemini-2.0-flash"
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    summary_min_length: int = DEFAULT_MIN_SUMMARY_LENGTH
    payload_scan: Literal["greedy", "balanced"] = "greedy"
    extra_conditions: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_condition_terms(raw: str | None) -> tuple[str, ...]:
    """Parse extra chronic-condition search terms from env."""
    if raw is None:
        return ()
    terms: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value and value not in terms:
            terms.append(value)
    return tuple(terms)
