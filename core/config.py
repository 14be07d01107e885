"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="J&T Daily Report API", alias="APP_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Data source
    data_source: str = Field(default="google", alias="DATA_SOURCE")
    google_sheets_id: str = Field(default="", alias="GOOGLE_SHEETS_ID")
    google_api_key: str = Field(default="", alias="GOOGLE_API_KEY")
    google_access_token: str = Field(default="", alias="GOOGLE_ACCESS_TOKEN")
    google_sheets_base_url: str = Field(
        default="https://sheets.googleapis.com/v4/spreadsheets",
        alias="GOOGLE_SHEETS_BASE_URL"
    )
    google_timeout: int = Field(default=30, alias="GOOGLE_TIMEOUT")
    workbook_path: str = Field(default="report.xlsx", alias="WORKBOOK_PATH")

    # Processing
    max_concurrent_days: int = Field(default=4, alias="MAX_CONCURRENT_DAYS")
    max_range_days: int = Field(default=62, alias="MAX_RANGE_DAYS")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("data_source")
    @classmethod
    def validate_data_source(cls, v):
        """Validate the spreadsheet backend name."""
        v_lower = v.lower()
        if v_lower not in ("google", "workbook"):
            raise ValueError("Data source must be 'google' or 'workbook'")
        return v_lower

    @field_validator("max_concurrent_days")
    @classmethod
    def validate_concurrency(cls, v):
        """Validate concurrency setting."""
        if v < 1:
            raise ValueError("Max concurrent days must be at least 1")
        if v > 31:
            raise ValueError("Max concurrent days should not exceed 31")
        return v

    @field_validator("max_range_days", "google_timeout")
    @classmethod
    def validate_positive(cls, v):
        """Validate limits are positive."""
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
