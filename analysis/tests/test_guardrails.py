"""
Tests for analysis guardrails - blocking input checks and coverage warnings.
"""

import pytest

from analysis.models import Company, FinancialData
from analysis.guardrails import (
    DataQualityError,
    validate_unique_ids,
    validate_numeric_inputs,
    validate_portfolio,
    check_series_coverage,
    check_industry_coverage,
    run_all_guardrails,
)


def make_company(company_id, industry='Retail', **series):
    return Company(
        id=company_id,
        name=f'{company_id} Inc.',
        industry=industry,
        financial_data=FinancialData(**series)
    )


def full_company(company_id, industry='Retail', periods=3):
    values = tuple(float(100 + i) for i in range(periods))
    return make_company(
        company_id, industry,
        revenue=values, net_income=values, total_assets=values,
        total_liabilities=values, shareholders_equity=values
    )


class TestBlockingChecks:
    """Tests for checks that raise DataQualityError."""

    def test_unique_ids_pass(self):
        validate_unique_ids([make_company('a'), make_company('b')])

    def test_duplicate_ids(self):
        with pytest.raises(DataQualityError, match=r"\['a'\]"):
            validate_unique_ids([make_company('a'), make_company('b'), make_company('a')])

    def test_nan_value(self):
        company = make_company('x', net_income=(1.0, float('nan')))

        with pytest.raises(DataQualityError, match="NaN value found in x 'Net Income' period 1"):
            validate_numeric_inputs([company])

    def test_infinite_value(self):
        company = make_company('x', revenue=(float('inf'),))

        with pytest.raises(DataQualityError, match="Infinite value found in x 'Revenue' period 0"):
            validate_numeric_inputs([company])

    def test_extra_series_checked(self):
        company = make_company('x', extra={'EBITDA': (float('-inf'),)})

        with pytest.raises(DataQualityError, match="EBITDA"):
            validate_numeric_inputs([company])

    def test_non_finite_market_cap(self):
        company = Company(id='x', name='X', industry='Retail', market_cap=float('nan'))

        with pytest.raises(DataQualityError, match="Market cap"):
            validate_numeric_inputs([company])

    def test_portfolio_must_be_list(self):
        with pytest.raises(DataQualityError, match="must be a list"):
            validate_portfolio('not a portfolio')

    def test_entries_must_be_companies(self):
        with pytest.raises(DataQualityError, match="must be Company"):
            validate_portfolio([{'id': 'a'}])

    def test_valid_portfolio(self):
        validate_portfolio([full_company('a'), full_company('b')])
        validate_portfolio([])


class TestCoverageWarnings:
    """Tests for non-blocking coverage warnings."""

    def test_complete_data_no_warnings(self):
        companies = [full_company('a'), full_company('b')]

        assert check_series_coverage(companies) == []
        assert check_industry_coverage(companies) == []

    def test_missing_series(self):
        company = make_company('a', revenue=(1.0, 2.0))

        warnings = check_series_coverage([company])

        assert len(warnings) == 1
        assert 'a has no Net Income' in warnings[0]

    def test_short_revenue(self):
        company = full_company('a', periods=1)

        warnings = check_series_coverage([company])

        assert any('1 Revenue period(s)' in w for w in warnings)

    def test_mismatched_revenue_lengths(self):
        companies = [full_company('a', periods=3), full_company('b', periods=4)]

        warnings = check_series_coverage(companies)

        assert any('lengths differ' in w for w in warnings)

    def test_sole_industry_member(self):
        companies = [full_company('a', 'Tech'), full_company('b', 'Tech'), full_company('c', 'Energy')]

        warnings = check_industry_coverage(companies)

        assert len(warnings) == 1
        assert "c is the only company in 'Energy'" in warnings[0]

    def test_run_all_guardrails(self):
        companies = [full_company('a', 'Tech'), full_company('b', 'Energy')]

        warnings = run_all_guardrails(companies)

        assert len(warnings) == 2

    def test_run_all_guardrails_blocks(self):
        with pytest.raises(DataQualityError):
            run_all_guardrails([full_company('a'), full_company('a')])
