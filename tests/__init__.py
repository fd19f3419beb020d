"""
Test Suite for the Portfolio Analysis Engine

Includes:
- Unit tests for statistical calculations
- Engine tests for risk, performance, benchmarking and trends
- Job and CLI integration tests against JSON fixtures
"""
