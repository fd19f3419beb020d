"""
Guardrails for analysis engine - input contract checks and coverage warnings.
Malformed numbers fail fast; thin data only produces warnings.
"""

import math
from collections import Counter
from typing import List

from analysis.models import Company, REVENUE, STANDARD_SERIES


class DataQualityError(Exception):
    """Raised when input data violates the engine's contract."""
    pass


def validate_unique_ids(companies: List[Company]) -> None:
    """
    Raises:
        DataQualityError: If two companies share an id
    """
    counts = Counter(company.id for company in companies)
    duplicates = sorted(company_id for company_id, count in counts.items() if count > 1)
    if duplicates:
        raise DataQualityError(f"Duplicate company ids in portfolio: {duplicates}")


def validate_numeric_inputs(companies: List[Company]) -> None:
    """
    Validate that every series value is a finite real number.

    Raises:
        DataQualityError: Naming the company and metric of the first bad value
    """
    for company in companies:
        for label, values in company.financial_data.items():
            for period, value in enumerate(values):
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise DataQualityError(
                        f"Non-numeric value in {company.id} '{label}' period {period}: {value!r}"
                    )
                if math.isnan(value):
                    raise DataQualityError(f"NaN value found in {company.id} '{label}' period {period}")
                if math.isinf(value):
                    raise DataQualityError(f"Infinite value found in {company.id} '{label}' period {period}")

        if company.market_cap is not None and not math.isfinite(company.market_cap):
            raise DataQualityError(f"Market cap for {company.id} must be finite, got {company.market_cap}")


def validate_portfolio(companies: List[Company]) -> None:
    """
    Run the blocking checks every engine operation relies on.

    Raises:
        DataQualityError: If the portfolio is not a list or contains bad data
    """
    if companies is None or not isinstance(companies, (list, tuple)):
        raise DataQualityError(f"companies must be a list, got {type(companies).__name__}")

    for company in companies:
        if not isinstance(company, Company):
            raise DataQualityError(f"Portfolio entries must be Company, got {type(company).__name__}")

    validate_unique_ids(companies)
    validate_numeric_inputs(companies)


def check_series_coverage(companies: List[Company]) -> List[str]:
    """
    Note thin or missing data that will make formulas fall back to defaults.

    Returns:
        List of coverage warnings
    """
    warnings = []

    for company in companies:
        missing = [label for label in STANDARD_SERIES if not company.financial_data.has_series(label)]
        if missing:
            warnings.append(
                f"{company.id} has no {', '.join(missing)} data; dependent ratios default to 0"
            )

        revenue = company.series(REVENUE)
        if len(revenue) < 2:
            warnings.append(
                f"{company.id} has {len(revenue)} Revenue period(s); volatility and growth default to 0"
            )

    revenue_lengths = {len(company.series(REVENUE)) for company in companies}
    if len(revenue_lengths) > 1:
        warnings.append(
            f"Revenue series lengths differ across companies ({sorted(revenue_lengths)}); "
            f"correlations between mismatched series default to 0"
        )

    return warnings


def check_industry_coverage(companies: List[Company]) -> List[str]:
    """Warn about companies that have no same-industry peers to benchmark against."""
    counts = Counter(company.industry for company in companies)
    return [
        f"{company.id} is the only company in '{company.industry}'; benchmarking metrics will be empty"
        for company in companies
        if counts[company.industry] == 1
    ]


def run_all_guardrails(companies: List[Company]) -> List[str]:
    """
    Run blocking checks, then collect non-blocking warnings.

    Raises:
        DataQualityError: If critical issues found
    """
    validate_portfolio(companies)
    return check_series_coverage(companies) + check_industry_coverage(companies)
