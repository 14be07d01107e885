"""
Spreadsheet data sources.

This package contains:
- client: Google Sheets REST client and client factory
- selector: Monthly sheet naming and detection
- workbook: Local .xlsx workbook client
"""
