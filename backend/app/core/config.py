"""Application configuration loaded from environment variables.

All configuration is via environment variables (or a local .env file).
No hardcoded hostnames: the site's own hosts used for internal-link
classification are configured here and passed explicitly to the scorers.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Content Score Service")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Server
    port: int = Field(default=8000, description="Port to bind to")
    host: str = Field(default="0.0.0.0", description="Host to bind to")

    # CORS
    frontend_url: str | None = Field(
        default=None,
        description="Frontend origin allowed by CORS (all origins when unset)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # Scoring
    site_hostnames: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description=(
            "First-party hostnames; links whose href contains one of them are "
            "internal. Comma-separated in the environment."
        ),
    )
    score_min_word_count: int = Field(
        default=300, ge=1, description="Minimum article length in words"
    )
    score_max_paragraph_words: int = Field(
        default=80, ge=1, description="Maximum words for a short paragraph"
    )
    score_checklist_threshold: int = Field(
        default=80,
        ge=0,
        le=100,
        description="Sub-score at which a checklist item counts as completed",
    )
    score_simulated_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Artificial delay before scoring so clients can show a loading state",
    )
    score_batch_max_items: int = Field(
        default=50, ge=1, description="Maximum documents per batch request"
    )

    @field_validator("site_hostnames", mode="before")
    @classmethod
    def split_hostnames(cls, value: object) -> object:
        """Accept a comma-separated string as well as a list."""
        if isinstance(value, str):
            return [host.strip().lower() for host in value.split(",") if host.strip()]
        if isinstance(value, list):
            return [str(host).strip().lower() for host in value if str(host).strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
