"""
HTTP API for daily and range reports.
"""
