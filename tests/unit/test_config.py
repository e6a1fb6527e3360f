"""
Unit Tests for Configuration

Tests for settings and configuration management.
"""

from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from teachassist.config import Settings


def test_settings_defaults():
    """Test default settings values."""
    settings = Settings()

    assert settings.ENVIRONMENT in ["local", "staging", "production"]
    assert settings.LOG_LEVEL in ["DEBUG", "INFO", "WARNING", "ERROR"]
    assert isinstance(settings.DATABASE_URL, str)
    assert settings.OPENAI_MODEL == "gpt-3.5-turbo"
    assert settings.DEFAULT_REMINDER_MINUTES == 30
    assert settings.REMINDER_POLL_INTERVAL_SECONDS == 60


def test_settings_computed_properties():
    """Test computed properties."""
    settings = Settings(MAX_UPLOAD_SIZE_MB=10, DISPLAY_TIMEZONE="Asia/Kolkata")

    assert settings.max_upload_bytes == 10 * 1024 * 1024
    assert settings.display_zone == ZoneInfo("Asia/Kolkata")
    assert isinstance(settings.is_production, bool)
    assert isinstance(settings.is_local, bool)


def test_settings_environment_specific():
    """Test environment-specific behavior."""
    settings_local = Settings(ENVIRONMENT="local")
    assert settings_local.is_local is True
    assert settings_local.is_production is False

    settings_prod = Settings(ENVIRONMENT="production")
    assert settings_prod.is_local is False
    assert settings_prod.is_production is True


def test_unknown_timezone_rejected():
    """Test that a bad DISPLAY_TIMEZONE fails at startup."""
    with pytest.raises(ValidationError):
        Settings(DISPLAY_TIMEZONE="Mars/Olympus_Mons")
