"""
Configuration settings for the suggestion board.

This module handles environment variable loading and configuration management
using Pydantic for validation and type safety.
"""

from functools import lru_cache
from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Suggestion board configuration settings.

    All settings can be overridden via environment variables prefixed with
    ``SUGGESTION_BOARD_``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUGGESTION_BOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Suggestion API Configuration
    suggestion_api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL for the suggestion backend API"
    )
    api_timeout: int = Field(
        default=30,
        description="Timeout in seconds for API requests"
    )
    api_retries: int = Field(
        default=0,
        ge=0,
        description="Retry attempts for failed API requests (0 disables retrying)"
    )

    # Board Settings
    default_page_size: int = Field(
        default=5,
        gt=0,
        description="Suggestions shown per page on first load"
    )
    page_size_options: Tuple[int, ...] = Field(
        default=(5, 10, 20),
        description="Page sizes offered to the user"
    )
    display_timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone used when formatting timestamps (unset: the local timezone of the host)"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Logging format (json or text)"
    )
    debug_mode: bool = Field(
        default=True,
        description="Enable debug mode"
    )

    @field_validator("page_size_options")
    @classmethod
    def check_page_sizes(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        if not v or any(size <= 0 for size in v):
            raise ValueError("page_size_options must contain positive integers")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()
