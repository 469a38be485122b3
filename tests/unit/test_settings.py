# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from unittest.mock import patch

import pytest

from roster.core.config.settings import (
    BoardSettings,
    RemoteStoreSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestRemoteStoreSettings:
    """Tests for RemoteStoreSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = RemoteStoreSettings()

        assert settings.url == "http://localhost:54321"
        assert settings.schema_name == "public"
        assert settings.table == "enrollments"
        assert settings.timeout == 30.0

    def test_rest_url_property(self) -> None:
        """Test REST URL strips a trailing slash."""
        settings = RemoteStoreSettings(url="https://abc.supabase.co/")

        assert settings.rest_url == "https://abc.supabase.co/rest/v1"

    def test_auth_headers(self) -> None:
        """Test the key is sent as apikey and bearer token."""
        settings = RemoteStoreSettings(api_key="secret-key", schema_name="school")  # type: ignore[arg-type]

        headers = settings.auth_headers

        assert headers["apikey"] == "secret-key"
        assert headers["Authorization"] == "Bearer secret-key"
        assert headers["Accept-Profile"] == "school"
        assert headers["Content-Profile"] == "school"

    def test_loads_from_environment(self) -> None:
        """Test settings load from environment variables."""
        env = {
            "ROSTER_STORE_URL": "https://env.supabase.co",
            "ROSTER_STORE_API_KEY": "env-key",
            "ROSTER_STORE_TABLE": "course_enrollments",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = RemoteStoreSettings()

        assert settings.url == "https://env.supabase.co"
        assert settings.api_key.get_secret_value() == "env-key"
        assert settings.table == "course_enrollments"

    def test_api_key_hidden_in_repr(self) -> None:
        """Test the API key is not leaked by repr."""
        settings = RemoteStoreSettings(api_key="secret-key")  # type: ignore[arg-type]

        assert "secret-key" not in repr(settings)


class TestBoardSettings:
    """Tests for BoardSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = BoardSettings()

        assert settings.default_sort == "date_asc"
        assert settings.timezone is None

    def test_loads_from_environment(self) -> None:
        """Test settings load from environment variables."""
        env = {"ROSTER_BOARD_DEFAULT_SORT": "name", "ROSTER_BOARD_TIMEZONE": "Europe/Dublin"}

        with patch.dict(os.environ, env, clear=False):
            settings = BoardSettings()

        assert settings.default_sort == "name"
        assert settings.timezone == "Europe/Dublin"

    def test_invalid_sort_rejected(self) -> None:
        """Test unknown sort orders fail validation."""
        with pytest.raises(ValueError):
            BoardSettings(default_sort="random")  # type: ignore[arg-type]


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_production_without_api_key_raises_error(self) -> None:
        """Test that production without a store API key raises error."""
        with pytest.raises(ValueError) as exc_info:
            Settings(environment="production", store=RemoteStoreSettings(api_key=""))  # type: ignore[arg-type]

        assert "API key must be set in production" in str(exc_info.value)

    def test_production_with_api_key_succeeds(self) -> None:
        """Test that production with an API key from the environment works."""
        env = {"ROSTER_STORE_API_KEY": "production-key"}

        with patch.dict(os.environ, env, clear=False):
            settings = Settings(environment="production")

        assert settings.environment == "production"

    def test_subsettings_loaded(self) -> None:
        """Test that all subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.store, RemoteStoreSettings)
        assert isinstance(settings.board, BoardSettings)

    def test_environment_properties(self) -> None:
        """Test is_development and is_production properties."""
        dev_settings = Settings(environment="development")
        staging_settings = Settings(environment="staging")

        assert dev_settings.is_development is True
        assert dev_settings.is_production is False
        assert staging_settings.is_development is False
        assert staging_settings.is_production is False


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        clear_settings_cache()

        assert get_settings() is get_settings()

    def test_clear_cache_allows_reload(self) -> None:
        """Test that clearing cache allows settings reload."""
        clear_settings_cache()
        settings1 = get_settings()

        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2
        assert isinstance(settings2, Settings)
