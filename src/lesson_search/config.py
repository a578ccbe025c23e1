"""Centralized configuration for lesson-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``LESSON_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LESSON_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Query settings
    max_results: int = Field(default=12, ge=1, description="Maximum number of ranked results returned")
    min_query_length: int = Field(
        default=2, ge=1, description="Queries shorter than this (after trimming) return no results"
    )
    title_weight: int = Field(default=10, ge=1, description="Score added when a term hits chapter title or subtitle")
    body_weight: int = Field(default=1, ge=0, description="Score added when a term hits only the body text")

    # Index settings
    search_text_limit: int = Field(default=4000, ge=100, description="Maximum characters of searchable text per entry")

    # Presentation
    excerpt_before: int = Field(default=30, ge=0, description="Characters of body text shown before the first hit")
    excerpt_after: int = Field(default=100, ge=0, description="Characters of body text shown from the first hit on")
    highlight_style: Literal["html", "plain"] = Field(
        default="html", description="html wraps hits in <mark>, plain wraps them in [[...]]"
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    @model_validator(mode="after")
    def _check_weights(self) -> "Settings":
        # Title hits must always outrank body hits for navigational queries
        if self.body_weight >= self.title_weight:
            raise ValueError(
                f"LESSON_SEARCH_BODY_WEIGHT ({self.body_weight}) must be lower than "
                f"LESSON_SEARCH_TITLE_WEIGHT ({self.title_weight})"
            )
        return self
