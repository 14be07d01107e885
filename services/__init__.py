"""
Service layer for business logic.

This package contains the report service that fetches the monthly sheet's
tables for a day, isolates per-table failures, and aggregates date ranges.
"""
