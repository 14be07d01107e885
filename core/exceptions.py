"""
Custom exceptions for better error handling.
"""
from typing import Any, Dict, Optional


class DailyReportException(Exception):
    """Base exception for all daily report errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DailyReportException):
    """Raised when configuration is invalid."""
    pass


class DataSourceError(DailyReportException):
    """Raised when the spreadsheet source is unreachable, unauthorized or unreadable."""
    pass


class ValidationError(DailyReportException):
    """Raised when a report request is malformed."""
    pass


class DataNotFoundError(DailyReportException):
    """Raised when no usable data exists for the requested dates."""
    pass
