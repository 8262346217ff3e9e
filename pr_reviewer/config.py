"""
Application configuration management.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    When running as a GitHub Action the ``INPUT_*`` variables set by the
    runner are accepted as well.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # GitHub
    github_token: str = Field(validation_alias=AliasChoices("github_token", "input_github_token"))
    github_api_url: str = "https://api.github.com"

    # OpenAI
    openai_api_key: str = Field(validation_alias=AliasChoices("openai_api_key", "input_openai_api_key"))
    openai_api_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("openai_api_model", "input_openai_api_model"),
    )
    openai_json_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("openai_json_mode", "input_openai_json_mode"),
    )
    openai_base_url: Optional[str] = None

    # Review
    exclude: str = Field(default="", validation_alias=AliasChoices("exclude", "input_exclude"))
    anchor_policy: str = "drop"
    max_concurrency: int = 4

    # Webhook
    webhook_secret: Optional[str] = None

    # Application
    log_level: str = "INFO"
    request_timeout_seconds: float = 60.0


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
