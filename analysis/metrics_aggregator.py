"""
Metrics aggregator - composes all portfolio calculations into PortfolioMetrics.
Pure function that combines risk, performance, comparative and industry analysis.
"""

import logging
from typing import Dict, List, Mapping

import numpy as np

from analysis.models import (
    Company,
    PortfolioMetrics,
    TopPerformer,
    Underperformer,
    IndustrySummary,
    REVENUE,
    NET_INCOME,
)
from analysis.calculations.ratios import latest_value
from analysis.risk_engine import calculate_risk_metrics, company_weights
from analysis.performance_engine import (
    calculate_performance_metrics,
    company_metrics,
    BENCHMARK_METRICS,
    ROE,
    ROA,
    REVENUE_GROWTH,
)

logger = logging.getLogger(__name__)


TOP_ROE_THRESHOLD = 20.0
TOP_GROWTH_THRESHOLD = 15.0
MAX_TOP_PERFORMERS = 5

LOW_ROE_THRESHOLD = 5.0
LOW_ROA_THRESHOLD = 3.0


def compose_portfolio_metrics(companies: List[Company]) -> PortfolioMetrics:
    """
    Compose all portfolio metrics.

    Args:
        companies: Portfolio members

    Returns:
        PortfolioMetrics; numeric fields are 0.0 and collections empty
        for an empty portfolio
    """
    weights = company_weights(companies)
    metrics_by_id = {company.id: company_metrics(company) for company in companies}

    risk = calculate_risk_metrics(companies, weights)
    performance = calculate_performance_metrics(companies, risk, weights)

    totals = _calculate_totals(companies)

    portfolio = PortfolioMetrics(
        portfolio_volatility=risk.portfolio_volatility,
        correlation_matrix=risk.correlation_matrix,
        diversification_ratio=risk.diversification_ratio,
        concentration_risk=risk.concentration_risk,
        volatilities=risk.volatilities,
        weighted_average_roe=performance.weighted_average_roe,
        weighted_average_roa=performance.weighted_average_roa,
        portfolio_growth_rate=performance.portfolio_growth_rate,
        risk_adjusted_return=performance.risk_adjusted_return,
        total_revenue=totals['total_revenue'],
        total_net_income=totals['total_net_income'],
        top_performers=identify_top_performers(companies, metrics_by_id),
        underperformers=identify_underperformers(companies, metrics_by_id),
        industry_breakdown=analyze_industry_breakdown(companies, weights, metrics_by_id),
    )

    logger.debug(
        f"Composed portfolio metrics for {len(companies)} companies in "
        f"{len(portfolio.industry_breakdown)} industries"
    )
    return portfolio


def _calculate_totals(companies: List[Company]) -> Dict[str, float]:
    """Sum of latest revenue and net income across the portfolio."""
    total_revenue = 0.0
    total_net_income = 0.0
    for company in companies:
        total_revenue += latest_value(company.series(REVENUE))
        total_net_income += latest_value(company.series(NET_INCOME))

    return {
        'total_revenue': total_revenue,
        'total_net_income': total_net_income,
    }


def identify_top_performers(
    companies: List[Company],
    metrics_by_id: Mapping[str, Mapping[str, float]]
) -> List[TopPerformer]:
    """
    Companies with ROE above 20% or revenue growth above 15%.

    Returns:
        Up to 5 entries sorted by value descending, ranked 1..n
    """
    candidates = []
    for company in companies:
        metrics = metrics_by_id[company.id]

        if metrics[ROE] > TOP_ROE_THRESHOLD:
            candidates.append((company.name, ROE, metrics[ROE]))

        if metrics[REVENUE_GROWTH] > TOP_GROWTH_THRESHOLD:
            candidates.append((company.name, REVENUE_GROWTH, metrics[REVENUE_GROWTH]))

    # Stable sort keeps portfolio order among equal values
    candidates.sort(key=lambda x: x[2], reverse=True)

    return [
        TopPerformer(company=name, metric=metric, value=value, rank=i + 1)
        for i, (name, metric, value) in enumerate(candidates[:MAX_TOP_PERFORMERS])
    ]


def identify_underperformers(
    companies: List[Company],
    metrics_by_id: Mapping[str, Mapping[str, float]]
) -> List[Underperformer]:
    """Companies with weak ROE (< 5%) or ROA (< 3%), in portfolio order."""
    underperformers = []
    for company in companies:
        metrics = metrics_by_id[company.id]

        if metrics[ROE] < LOW_ROE_THRESHOLD:
            underperformers.append(Underperformer(
                company=company.name,
                issue='Low Return on Equity',
                severity='high',
                recommendation='Review capital allocation and operational efficiency',
            ))

        if metrics[ROA] < LOW_ROA_THRESHOLD:
            underperformers.append(Underperformer(
                company=company.name,
                issue='Poor Asset Utilization',
                severity='medium',
                recommendation='Optimize asset turnover and margin improvement',
            ))

    return underperformers


def analyze_industry_breakdown(
    companies: List[Company],
    weights: Mapping[str, float],
    metrics_by_id: Mapping[str, Mapping[str, float]]
) -> Dict[str, IndustrySummary]:
    """
    Group the portfolio by industry label.

    Returns:
        Industry -> IndustrySummary with member count, summed weight and
        mean of each benchmark metric over members (first-seen order)
    """
    members: Dict[str, List[Company]] = {}
    for company in companies:
        members.setdefault(company.industry, []).append(company)

    breakdown = {}
    for industry, group in members.items():
        avg_metrics = {
            metric: float(np.mean([metrics_by_id[c.id][metric] for c in group]))
            for metric in BENCHMARK_METRICS
        }
        breakdown[industry] = IndustrySummary(
            count=len(group),
            weighted_value=sum(weights.get(c.id, 0.0) for c in group),
            avg_metrics=avg_metrics,
        )

    return breakdown
