"""
Centralized Settings Configuration

Uses Pydantic Settings to load configuration from environment variables
with validation and type coercion.
"""

from typing import Optional
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Firestore (read-only document store)
    firestore_project_id: str = "matchday-records"
    firestore_database: str = "(default)"
    firestore_api_key: Optional[SecretStr] = None
    firestore_base_url: str = "https://firestore.googleapis.com/v1"
    firestore_page_size: int = 300

    # Season window
    history_years: list[int] = [2022, 2023, 2024, 2025]
    timezone: str = "Asia/Seoul"  # wall clock used to resolve the current season
    partner_season: Optional[int] = 2025  # None follows the current season

    # Leaderboards
    leaderboard_size: int = 10
    badge_rank_cutoff: int = 3

    # History lookups fan out one request per (player, past year)
    max_concurrent_lookups: int = 16

    # Resilience
    retry_max_attempts: int = 3
    retry_base_delay: float = 2.0
    retry_max_delay: float = 30.0
    circuit_breaker_threshold: int = 5
    circuit_breaker_timeout: int = 60
    http_timeout: int = 30

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    service_name: str = "matchday-records"

    # Shown to users when a view fails to load
    load_error_message: str = "기록을 가져오는 중 오류가 발생했습니다."

    # Dashboard frontends allowed to call the API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Development mode
    development_mode: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either json or console."""
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("max_concurrent_lookups", "leaderboard_size", "badge_rank_cutoff")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Limits and cutoffs must be at least 1."""
        if v < 1:
            raise ValueError("value must be >= 1")
        return v

    @field_validator("history_years")
    @classmethod
    def validate_history_years(cls, v: list[int]) -> list[int]:
        """History years are kept sorted and unique."""
        return sorted(set(v))


# Default settings instance for convenience
# Import this for quick access: from core.settings import settings
settings = Settings()
