"""
Performance engine - per-company ratios and portfolio-weighted aggregates.
"""

import logging
from typing import Dict, List, Optional, Mapping

from analysis.models import Company, PerformanceMetrics, RiskMetrics, REVENUE
from analysis.calculations.returns import growth_rate
from analysis.calculations.ratios import (
    return_on_equity,
    return_on_assets,
    net_margin,
    asset_turnover,
)
from analysis.risk_engine import company_weights

logger = logging.getLogger(__name__)


ROE = 'ROE'
ROA = 'ROA'
REVENUE_GROWTH = 'Revenue Growth'
NET_MARGIN = 'Net Margin'
ASSET_TURNOVER = 'Asset Turnover'

# Benchmark metrics in reporting order
BENCHMARK_METRICS = [ROE, ROA, REVENUE_GROWTH, NET_MARGIN, ASSET_TURNOVER]


def company_metrics(company: Company) -> Dict[str, float]:
    """
    Calculate the five standard metrics for one company.

    Returns:
        Dictionary in BENCHMARK_METRICS order; every metric has a value
        because each formula falls back to 0.0
    """
    return {
        ROE: return_on_equity(company),
        ROA: return_on_assets(company),
        REVENUE_GROWTH: growth_rate(company.series(REVENUE)),
        NET_MARGIN: net_margin(company),
        ASSET_TURNOVER: asset_turnover(company),
    }


def portfolio_risk(risk: RiskMetrics) -> float:
    """Composite risk figure: concentration risk + (1 - diversification ratio)."""
    return risk.concentration_risk + (1 - risk.diversification_ratio)


def calculate_performance_metrics(
    companies: List[Company],
    risk: RiskMetrics,
    weights: Optional[Mapping[str, float]] = None
) -> PerformanceMetrics:
    """
    Weighted averages of ROE, ROA and revenue growth plus risk-adjusted return.

    Args:
        companies: Portfolio members
        risk: Risk metrics for the same portfolio
        weights: Company id -> weight (defaults to equal weighting)

    Returns:
        PerformanceMetrics; all zeros for an empty portfolio
    """
    if weights is None:
        weights = company_weights(companies)

    total_weight = 0.0
    weighted_roe = 0.0
    weighted_roa = 0.0
    weighted_growth = 0.0

    for company in companies:
        weight = weights.get(company.id, 0.0)
        total_weight += weight
        weighted_roe += return_on_equity(company) * weight
        weighted_roa += return_on_assets(company) * weight
        weighted_growth += growth_rate(company.series(REVENUE)) * weight

    if total_weight <= 0:
        return PerformanceMetrics(
            weighted_average_roe=0.0,
            weighted_average_roa=0.0,
            portfolio_growth_rate=0.0,
            risk_adjusted_return=0.0,
        )

    avg_roe = weighted_roe / total_weight
    composite_risk = portfolio_risk(risk)
    risk_adjusted = avg_roe / composite_risk if composite_risk > 0 else 0.0

    if composite_risk <= 0:
        logger.debug(f"Composite portfolio risk {composite_risk:.4f} is not positive; risk-adjusted return set to 0")

    return PerformanceMetrics(
        weighted_average_roe=avg_roe,
        weighted_average_roa=weighted_roa / total_weight,
        portfolio_growth_rate=weighted_growth / total_weight,
        risk_adjusted_return=risk_adjusted,
    )
