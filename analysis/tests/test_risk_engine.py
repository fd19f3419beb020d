"""
Tests for risk engine - volatilities, correlation matrix and portfolio risk.
Uses synthetic revenue series where return volatility is easy to verify by hand.
"""

import pytest

from analysis.models import Company, FinancialData
from analysis.risk_engine import (
    company_weights,
    company_volatilities,
    correlation_matrix,
    concentration_risk,
    calculate_risk_metrics,
)


def make_company(company_id, revenue, industry='Retail'):
    return Company(
        id=company_id,
        name=f'{company_id} Inc.',
        industry=industry,
        financial_data=FinancialData(revenue=tuple(revenue) if revenue is not None else None)
    )


class TestCompanyVolatilities:
    """Tests for per-company revenue return volatility."""

    def test_volatility_of_returns(self):
        # Returns: 0.20, -0.25 -> mean -0.025, deviations ±0.225
        companies = [make_company('a', [100, 120, 90])]

        assert company_volatilities(companies)['a'] == pytest.approx(0.225)

    def test_constant_growth_has_zero_volatility(self):
        companies = [make_company('a', [100, 110, 121])]

        assert company_volatilities(companies)['a'] == pytest.approx(0.0, abs=1e-12)

    def test_short_series(self):
        companies = [make_company('a', [100, 120]), make_company('b', None)]

        vols = company_volatilities(companies)

        assert vols == {'a': 0.0, 'b': 0.0}


class TestCorrelationMatrix:
    """Tests for the pairwise correlation matrix."""

    def test_diagonal_is_one_without_data(self):
        companies = [make_company('a', None), make_company('b', [5])]

        matrix = correlation_matrix(companies)

        assert matrix['a']['a'] == 1.0
        assert matrix['b']['b'] == 1.0
        assert matrix['a']['b'] == 0.0

    def test_symmetric_and_bounded(self):
        companies = [
            make_company('a', [100, 120, 90, 130]),
            make_company('b', [50, 40, 70, 60]),
            make_company('c', [10, 11, 12, 13]),
        ]

        matrix = correlation_matrix(companies)

        for i in ['a', 'b', 'c']:
            for j in ['a', 'b', 'c']:
                assert matrix[i][j] == pytest.approx(matrix[j][i])
                assert -1.0 - 1e-9 <= matrix[i][j] <= 1.0 + 1e-9

    def test_length_mismatch_is_zero(self):
        companies = [make_company('a', [1, 2, 3]), make_company('b', [1, 2])]

        assert correlation_matrix(companies)['a']['b'] == 0.0

    def test_keys_cover_every_pair(self):
        companies = [make_company('a', [1, 2]), make_company('b', [2, 1])]

        matrix = correlation_matrix(companies)

        assert set(matrix.keys()) == {'a', 'b'}
        assert set(matrix['a'].keys()) == {'a', 'b'}


class TestCalculateRiskMetrics:
    """Tests for the combined risk metrics."""

    def test_single_company(self):
        """One company: portfolio volatility is its own, fully concentrated."""
        companies = [make_company('a', [100, 120, 90])]

        risk = calculate_risk_metrics(companies)

        assert risk.portfolio_volatility == pytest.approx(0.225)
        assert risk.diversification_ratio == pytest.approx(1.0)
        assert risk.concentration_risk == pytest.approx(1.0)

    def test_identical_companies_no_diversification(self):
        companies = [make_company('a', [100, 120, 90]), make_company('b', [100, 120, 90])]

        risk = calculate_risk_metrics(companies)

        assert risk.correlation_matrix['a']['b'] == pytest.approx(1.0)
        assert risk.portfolio_volatility == pytest.approx(0.225)
        assert risk.diversification_ratio == pytest.approx(1.0)
        assert risk.concentration_risk == pytest.approx(0.5)

    def test_zero_volatility_gives_zero_ratio(self):
        companies = [make_company('a', [100, 110, 121]), make_company('b', [100, 110, 121])]

        risk = calculate_risk_metrics(companies)

        assert risk.portfolio_volatility == pytest.approx(0.0, abs=1e-12)
        assert risk.diversification_ratio >= 0.0

    def test_empty_portfolio(self):
        risk = calculate_risk_metrics([])

        assert risk.portfolio_volatility == 0.0
        assert risk.diversification_ratio == 0.0
        assert risk.concentration_risk == 0.0
        assert risk.correlation_matrix == {}
        assert risk.volatilities == {}

    def test_concentration_is_one_over_n(self):
        for n in [1, 2, 3, 5]:
            companies = [make_company(f'c{i}', [100, 105, 110]) for i in range(n)]
            assert calculate_risk_metrics(companies).concentration_risk == pytest.approx(1.0 / n)

    def test_weights_helpers(self):
        companies = [make_company('a', None), make_company('b', None)]

        weights = company_weights(companies)

        assert weights == {'a': 0.5, 'b': 0.5}
        assert concentration_risk(weights) == pytest.approx(0.5)
