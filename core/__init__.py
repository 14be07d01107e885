"""
Core processing modules for the daily report.

This package contains:
- accumulate: Row classification and per-day totals
- aggregation: Range totals over daily reports
- attendance: Attendance block parsing
- cells: Cell value coercion
- config: Application configuration and settings
- exceptions: Custom exception classes
- formatting: Plain-text report rendering
- layouts: Column layouts of the monthly sheet
- logger: Logging configuration
- ranges: A1 range helpers
- schema: Pydantic models for report output
- sections: Section header detection
- segments: Daily segment splitting
"""
