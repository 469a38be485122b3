# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for Roster.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from roster.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.store.rest_url)
    'http://localhost:54321/rest/v1'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RemoteStoreSettings(BaseSettings):
    """Remote enrollment store (PostgREST / Supabase) configuration.

    The remote store is the system of record. The engine only keeps a
    cached snapshot of what it returns.

    Attributes:
        url: Base URL of the project (without the /rest/v1 suffix).
        api_key: API key sent as both apikey and bearer token.
        schema_name: Database schema exposed through PostgREST.
        table: Enrollment table name.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_STORE_",
        extra="ignore",
    )

    url: str = "http://localhost:54321"
    api_key: SecretStr = SecretStr("")
    schema_name: str = "public"
    table: str = "enrollments"
    timeout: float = 30.0

    @property
    def rest_url(self) -> str:
        """Build the REST endpoint base URL."""
        return f"{self.url.rstrip('/')}/rest/v1"

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build authentication headers for API requests."""
        key = self.api_key.get_secret_value()
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept-Profile": self.schema_name,
            "Content-Profile": self.schema_name,
        }


class BoardSettings(BaseSettings):
    """Enrollment board display defaults.

    Attributes:
        default_sort: Ordering used inside status columns.
        timezone: IANA zone used for date-range filters (local time if unset).
    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_BOARD_",
        extra="ignore",
    )

    default_sort: Literal["date_asc", "date_desc", "name"] = "date_asc"
    timezone: str | None = None


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        store: Remote store settings.
        board: Board display settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    store: RemoteStoreSettings = Field(default_factory=RemoteStoreSettings)
    board: BoardSettings = Field(default_factory=BoardSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production without a store API key.
        """
        if self.environment == "production":
            if not self.store.api_key.get_secret_value():
                raise ValueError(
                    "Remote store API key must be set in production. "
                    "Set ROSTER_STORE_API_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
