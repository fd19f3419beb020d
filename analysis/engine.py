"""
Portfolio analysis engine - the public operations.

Every operation is a pure function of the company list it receives
(and the requested metric names); nothing is cached between calls.
Callers pass a snapshot that is not mutated while a call runs.
"""

import logging
from typing import Dict, Any, List, Optional

from analysis.models import (
    Company,
    PortfolioMetrics,
    BenchmarkingResult,
    TrendAnalysis,
)
from analysis.guardrails import validate_portfolio
from analysis.metrics_aggregator import compose_portfolio_metrics
from analysis.benchmarking import benchmark_all
from analysis.trend_engine import analyze_single_trend
from reports.insights import generate_insights

logger = logging.getLogger(__name__)


def analyze_portfolio(companies: List[Company]) -> PortfolioMetrics:
    """
    Risk, performance, comparative and industry metrics for a portfolio.

    Raises:
        DataQualityError: If the input contains non-finite values or duplicate ids
    """
    validate_portfolio(companies)
    return compose_portfolio_metrics(list(companies))


def benchmark_companies(companies: List[Company]) -> List[BenchmarkingResult]:
    """
    One BenchmarkingResult per company, in input order.

    Raises:
        DataQualityError: If the input contains non-finite values or duplicate ids
    """
    validate_portfolio(companies)
    return benchmark_all(list(companies))


def analyze_trends(companies: List[Company], metric_names: List[str]) -> List[TrendAnalysis]:
    """
    One TrendAnalysis per requested metric, in request order.

    Metrics no company reports at least twice are still returned,
    with an empty per-company map.

    Raises:
        DataQualityError: If the input contains non-finite values or duplicate ids
    """
    validate_portfolio(companies)
    snapshot = list(companies)
    return [analyze_single_trend(snapshot, metric) for metric in metric_names]


def generate_portfolio_insights(
    companies: List[Company],
    thresholds: Optional[Dict[str, Any]] = None
) -> List[str]:
    """
    Advisory strings for a portfolio, in fixed rule order.

    An empty portfolio yields no insights.
    """
    validate_portfolio(companies)
    if not companies:
        return []

    metrics = compose_portfolio_metrics(list(companies))
    insights = generate_insights(metrics, thresholds)

    logger.debug(f"Generated {len(insights)} insights for {len(companies)} companies")
    return insights
