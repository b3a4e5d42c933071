"""
Unit tests for Pydantic Settings configuration.

Tests settings loading and validation.
"""

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_loads_from_env(self):
        """Settings should load from environment variables."""
        from app.config.settings import settings

        assert settings.jwt_secret
        assert settings.environment == "testing"
        assert settings.is_sqlite is True

    def test_settings_has_defaults(self):
        """Settings should have sensible defaults."""
        settings = Settings(jwt_secret="s")

        assert settings.jwt_algorithm == "HS256"
        assert settings.proration_cycle_days == 30
        assert settings.access_cookie_name == "access_token"
        assert settings.max_verification_attempts >= 1

    def test_empty_secret_rejected(self):
        with pytest.raises(ValidationError):
            Settings(jwt_secret="   ")

    def test_default_secret_rejected_in_production(self):
        with pytest.raises(ValidationError):
            Settings(jwt_secret="change-me", environment="production")

    def test_settings_are_immutable(self):
        settings = Settings(jwt_secret="s")
        with pytest.raises(ValidationError):
            settings.jwt_secret = "other"

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u:p@db/billing", "postgresql+asyncpg://u:p@db/billing"),
        ("postgres://u:p@db/billing", "postgresql+asyncpg://u:p@db/billing"),
        ("sqlite:///./billing.db", "sqlite+aiosqlite:///./billing.db"),
        ("sqlite+aiosqlite://", "sqlite+aiosqlite://"),
    ])
    def test_async_database_url(self, url, expected):
        assert Settings(jwt_secret="s", database_url=url).async_database_url == expected

    def test_is_production_property(self):
        """is_production should follow ENVIRONMENT."""
        assert Settings(jwt_secret="s", environment="Production").is_production is True
        assert Settings(jwt_secret="s", environment="development").is_development is True

    def test_allowed_origins_includes_localhost(self):
        """allowed_origins should include localhost for development."""
        settings = Settings(jwt_secret="s")

        assert "http://localhost:5173" in settings.allowed_origins
        assert "http://localhost:3000" in settings.allowed_origins


class TestGetSettings:

    def test_missing_secret_is_configuration_error(self, monkeypatch):
        from app.config.settings import get_settings
        from app.infrastructure.exceptions import ConfigurationError

        monkeypatch.delenv("JWT_SECRET", raising=False)
        get_settings.cache_clear()
        try:
            with pytest.raises(ConfigurationError) as exc_info:
                get_settings()
        finally:
            get_settings.cache_clear()

        assert exc_info.value.details["missing_keys"] == ["JWT_SECRET"]
