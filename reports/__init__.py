"""
Reporting Module

Insight rules, display formatting and atomic output for analysis results.
"""
