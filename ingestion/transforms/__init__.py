"""
Validation and normalization of raw company data.
"""
