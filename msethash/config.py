"""
msethash Configuration

Environment-based settings: the default group and logging options.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


class Settings(BaseSettings):
    """Settings from MSETHASH_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="MSETHASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_group: str = Field(
        default="muhash3072",
        description="Registry name of the group used when none is given",
    )

    group_params_file: Optional[str] = Field(
        default=None,
        description="JSON file with custom safe-prime group parameters; overrides default_group",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    log_format: str = Field(
        default="text",
        description="Log format: json or text",
    )

    @field_validator("default_group")
    @classmethod
    def _normalize_group(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("default_group must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get package settings (read once, then cached)."""
    return Settings()


def reload_settings() -> Settings:
    """Discard cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()
