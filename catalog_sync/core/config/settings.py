"""
Application settings and configuration management

Settings are built once at process start and passed explicitly to every
component. Nothing reads the environment after construction.
"""

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_sync.core.exceptions import ConfigurationError
from catalog_sync.shared.constants import (
    PROJECT_NAME,
    VERSION,
    USER_AGENT,
    DEFAULT_RATE_LIMIT_DELAY_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_BASE_DELAY_MS,
    DEFAULT_REQUEST_TIMEOUT_MS,
    DEFAULT_SYNC_TIMEOUT_MS,
    DEFAULT_DELETE_TIMEOUT_MS,
    DEFAULT_SYNC_BATCH_SIZE,
    INVALID_VARIANT_SKIP,
)

_ENV_CONFIG = SettingsConfigDict(
    env_file=(".env.local", ".env"),
    env_file_encoding="utf-8",
    case_sensitive=False,
    extra="ignore",
    frozen=True,
)


class ScraperSettings(BaseSettings):
    """Storefront scraping configuration"""

    model_config = _ENV_CONFIG

    RATE_LIMIT_DELAY_MS: int = Field(default=DEFAULT_RATE_LIMIT_DELAY_MS, ge=0)
    MAX_RETRIES: int = Field(default=DEFAULT_MAX_RETRIES, ge=1)
    RETRY_BASE_DELAY_MS: int = Field(default=DEFAULT_RETRY_BASE_DELAY_MS, ge=0)
    REQUEST_TIMEOUT_MS: int = Field(default=DEFAULT_REQUEST_TIMEOUT_MS, gt=0)
    USER_AGENT: str = Field(default=USER_AGENT)

    # What to do with variants missing an id or title: drop them silently
    # ("skip") or also list them as scrape failures ("record")
    INVALID_VARIANT_POLICY: Literal["skip", "record"] = Field(
        default=INVALID_VARIANT_SKIP
    )


class SyncSettings(BaseSettings):
    """Remote catalog GraphQL API configuration"""

    model_config = _ENV_CONFIG

    CATALOG_API_URL: str = Field(default="https://api.clore.app/dev")
    SYNC_BATCH_SIZE: int = Field(default=DEFAULT_SYNC_BATCH_SIZE, ge=1)
    SYNC_TIMEOUT_MS: int = Field(default=DEFAULT_SYNC_TIMEOUT_MS, gt=0)
    DELETE_TIMEOUT_MS: int = Field(default=DEFAULT_DELETE_TIMEOUT_MS, gt=0)

    @field_validator("CATALOG_API_URL")
    @classmethod
    def validate_api_url(cls, v):
        if not v:
            raise ValueError("CATALOG_API_URL must not be empty")
        return v


class AuthSettings(BaseSettings):
    """Identity provider (Supabase) configuration"""

    model_config = _ENV_CONFIG

    SUPABASE_URL: str = Field(default="https://qkkofuxfuluekvaypwqw.supabase.co")
    SUPABASE_ANON_KEY: str = Field(default="")


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    model_config = _ENV_CONFIG

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Literal["console", "json", "structured", "simple"] = Field(
        default="console"
    )
    LOG_TO_FILE: bool = Field(default=False)
    LOG_DIR: str = Field(default="logs")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        level = (v or "INFO").upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """Main application settings"""

    model_config = _ENV_CONFIG

    PROJECT_NAME: str = PROJECT_NAME
    VERSION: str = VERSION

    OUTPUT_DIR: str = Field(default="output")
    SAVE_OUTPUT: bool = Field(default=True)

    # Sub-settings
    scraper: ScraperSettings = Field(default_factory=ScraperSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(**overrides) -> Settings:
    """Build the immutable settings object, failing with ConfigurationError"""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
            cause=e,
        ) from e
