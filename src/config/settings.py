"""
Configuration Management for Ledger Facade

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The settings object is built once at startup and handed to the ledger
service. Nothing below the orchestrator reads the environment itself.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ActualSettings(BaseSettings):
    """Upstream Actual Budget (actual-http-api) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ACTUAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    server_url: str = Field(
        ...,
        min_length=1,
        description="Base URL of the actual-http-api server"
    )
    password: str = Field(
        ...,
        min_length=1,
        description="API key / password for the upstream server"
    )
    sync_id: str = Field(
        ...,
        min_length=1,
        description="Sync ID of the single budget this facade serves"
    )
    budget_encryption_key: str = Field(
        ...,
        min_length=1,
        description="End-to-end encryption password of the budget"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout for a single upstream call"
    )

    @field_validator('server_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise the base URL so paths can be appended safely."""
        return v.rstrip("/")


class AppSettings(BaseSettings):
    """
    HTTP facade settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for emitted log records"
    )

    # Startup
    startup_connect_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times to try reaching the ledger at startup"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def actual(self) -> ActualSettings:
        return ActualSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an additional
    "<name>_error" entry describing each failure. Used by the startup check.
    """
    results = {}

    settings = get_settings()

    for name in ("actual", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
