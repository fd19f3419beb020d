"""
Risk engine - per-company volatility, correlation and portfolio risk figures.
Pure functions over an immutable list of companies.
"""

import logging
from typing import Dict, List, Optional, Mapping

from analysis.models import Company, RiskMetrics, REVENUE
from analysis.calculations.returns import period_returns
from analysis.calculations.volatility import (
    volatility,
    portfolio_volatility,
    diversification_ratio,
)
from analysis.calculations.correlation import pearson_correlation
from analysis.calculations.concentration import equal_weights, herfindahl_index

logger = logging.getLogger(__name__)


def company_weights(companies: List[Company]) -> Dict[str, float]:
    """Portfolio weight per company id (equal weighting)."""
    return equal_weights(company.id for company in companies)


def company_volatilities(companies: List[Company]) -> Dict[str, float]:
    """
    Volatility of each company's revenue period returns.

    Returns:
        Dictionary mapping company ids to return volatility (0.0 when
        fewer than 2 returns are available)
    """
    return {
        company.id: volatility(period_returns(company.series(REVENUE)))
        for company in companies
    }


def correlation_matrix(companies: List[Company]) -> Dict[str, Dict[str, float]]:
    """
    Pairwise revenue correlation for every ordered pair of companies.

    The diagonal is fixed at 1.0 whatever the data.

    Returns:
        Nested dictionary: company id -> company id -> correlation
    """
    matrix = {}
    for company_a in companies:
        row = {}
        for company_b in companies:
            if company_a.id == company_b.id:
                row[company_b.id] = 1.0
            else:
                row[company_b.id] = pearson_correlation(
                    company_a.series(REVENUE),
                    company_b.series(REVENUE)
                )
        matrix[company_a.id] = row

    return matrix


def concentration_risk(weights: Mapping[str, float]) -> float:
    """Herfindahl index of the portfolio weights."""
    return herfindahl_index(weights)


def calculate_risk_metrics(
    companies: List[Company],
    weights: Optional[Mapping[str, float]] = None
) -> RiskMetrics:
    """
    Compute all portfolio risk metrics.

    Args:
        companies: Portfolio members
        weights: Company id -> weight (defaults to equal weighting)

    Returns:
        RiskMetrics with portfolio volatility, correlation matrix,
        diversification ratio, concentration risk and the individual
        volatilities
    """
    if weights is None:
        weights = company_weights(companies)

    volatilities = company_volatilities(companies)
    correlations = correlation_matrix(companies)

    port_vol = portfolio_volatility(volatilities, correlations, weights)
    div_ratio = diversification_ratio(volatilities, port_vol)
    concentration = concentration_risk(weights)

    logger.debug(
        f"Risk metrics for {len(companies)} companies: "
        f"volatility={port_vol:.4f}, diversification={div_ratio:.4f}, "
        f"concentration={concentration:.4f}"
    )

    return RiskMetrics(
        portfolio_volatility=port_vol,
        correlation_matrix=correlations,
        diversification_ratio=div_ratio,
        concentration_risk=concentration,
        volatilities=volatilities,
    )
