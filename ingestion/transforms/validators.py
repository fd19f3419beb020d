"""
Core validators for raw company records.
Pure functions - no IO, network, or side effects.
"""

import math
from typing import Dict, Any


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def financial_data_key(record: Dict[str, Any]) -> str:
    """Name of the series mapping key; both camelCase and snake_case are accepted."""
    if 'financialData' in record:
        return 'financialData'
    return 'financial_data'


def validate_series(company_id: str, label: str, values: Any) -> None:
    """
    Validate one metric series.

    Raises:
        ValidationError: If values is not a list of finite numbers
    """
    if not isinstance(label, str) or not label:
        raise ValidationError(f"{company_id}: metric label must be non-empty string, got {label!r}")

    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"{company_id} '{label}' must be a list, got {type(values)}")

    for period, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(
                f"{company_id} '{label}' period {period} must be numeric, got {type(value)}"
            )

        if not math.isfinite(value):
            raise ValidationError(f"{company_id} '{label}' period {period} must be finite, got {value}")


def validate_company_record(record: Dict[str, Any]) -> None:
    """
    Validate a raw company record.

    Args:
        record: Dictionary with id, name, industry and a metric -> values mapping

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(record, dict):
        raise ValidationError(f"Company record must be dict, got {type(record)}")

    # Required keys
    required_keys = {'id', 'name', 'industry'}
    missing = required_keys - set(record.keys())
    if 'financialData' not in record and 'financial_data' not in record:
        missing.add('financialData')
    if missing:
        raise ValidationError(f"Missing required keys: {sorted(missing)}")

    # Type validations
    for field in ['id', 'name', 'industry']:
        if not isinstance(record[field], str):
            raise ValidationError(f"{field} must be string, got {type(record[field])}")

    if not record['id']:
        raise ValidationError("id must be non-empty")

    company_id = record['id']

    # Optional market cap
    market_cap = record.get('marketCap', record.get('market_cap'))
    if market_cap is not None:
        if isinstance(market_cap, bool) or not isinstance(market_cap, (int, float)):
            raise ValidationError(f"{company_id}: marketCap must be numeric, got {type(market_cap)}")

        if not math.isfinite(market_cap):
            raise ValidationError(f"{company_id}: marketCap must be finite, got {market_cap}")

    financial_data = record[financial_data_key(record)]
    if not isinstance(financial_data, dict):
        raise ValidationError(
            f"{company_id}: financialData must be dict, got {type(financial_data)}"
        )

    for label, values in financial_data.items():
        # Explicit null marks an absent series
        if values is None:
            continue
        validate_series(company_id, label, values)
