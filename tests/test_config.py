"""
Unit tests for configuration module.
"""
import pytest
from pydantic import ValidationError

from core.config import get_settings, reset_settings

ENV_KEYS = [
    "APP_NAME", "HOST", "PORT", "LOG_LEVEL", "DATA_SOURCE", "GOOGLE_SHEETS_ID",
    "GOOGLE_API_KEY", "GOOGLE_ACCESS_TOKEN", "GOOGLE_TIMEOUT", "WORKBOOK_PATH",
    "MAX_CONCURRENT_DAYS", "MAX_RANGE_DAYS",
]


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    """Run without inherited settings or a local .env file."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    return monkeypatch


def test_settings_defaults(clean_env):
    """Test default configuration values."""
    settings = get_settings()
    assert settings.app_name == "J&T Daily Report API"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.data_source == "google"
    assert settings.google_sheets_id == ""
    assert settings.max_concurrent_days == 4
    assert settings.max_range_days == 62


def test_settings_from_environment(clean_env):
    """Test values are read from environment variables."""
    clean_env.setenv("GOOGLE_SHEETS_ID", "sheet-123")
    clean_env.setenv("DATA_SOURCE", "Workbook")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("MAX_RANGE_DAYS", "31")

    settings = get_settings()
    assert settings.google_sheets_id == "sheet-123"
    assert settings.data_source == "workbook"
    assert settings.log_level == "DEBUG"
    assert settings.max_range_days == 31


def test_settings_validation_port(clean_env):
    """Test port validation."""
    clean_env.setenv("PORT", "99999")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_log_level(clean_env):
    """Test log level validation."""
    clean_env.setenv("LOG_LEVEL", "INVALID")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_data_source(clean_env):
    """Test only known spreadsheet backends are accepted."""
    clean_env.setenv("DATA_SOURCE", "postgres")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_concurrency(clean_env):
    """Test concurrency bounds."""
    clean_env.setenv("MAX_CONCURRENT_DAYS", "0")
    with pytest.raises(ValidationError):
        get_settings()


def test_settings_singleton(clean_env):
    """Test settings singleton behavior."""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2
