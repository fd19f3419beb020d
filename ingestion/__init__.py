"""
Data Ingestion Module

Turns caller-supplied data into Company records for the engine:
- JSON-like company records (presentation layer shape)
- Long-format pandas DataFrames (one row per metric value)
"""

__version__ = "0.1.0"
