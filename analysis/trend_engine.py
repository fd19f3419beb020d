"""
Trend engine - per-company trend, volatility and forecast for one metric,
plus industry-wide average/median/quartile series aligned by period index.
"""

import logging
from typing import List, Sequence

import numpy as np

from analysis.models import Company, CompanyTrend, IndustryTrend, TrendAnalysis
from analysis.calculations.volatility import volatility
from analysis.calculations.percentiles import ascending_rank_quantile, median
from analysis.calculations.forecast import (
    trend_direction,
    linear_forecast,
    forecast_confidence,
)

logger = logging.getLogger(__name__)


MIN_TREND_POINTS = 2
FORECAST_PERIODS = 2


class TrendAnalysisError(Exception):
    """Raised when trend analysis input is invalid."""
    pass


def company_trend(values: Sequence[float]) -> CompanyTrend:
    """Trend record for a single series with at least 2 points."""
    return CompanyTrend(
        values=list(values),
        trend=trend_direction(values),
        volatility=volatility(values),
        forecast=linear_forecast(values, periods=FORECAST_PERIODS),
        confidence=forecast_confidence(values),
    )


def values_at_period(all_series: List[Sequence[float]], period: int) -> List[float]:
    """Values of every series that reaches the given period index."""
    return [series[period] for series in all_series if len(series) > period]


def industry_trend(companies: List[Company], metric: str) -> IndustryTrend:
    """
    Cross-company aggregate series for a metric.

    Periods are aligned by index, not calendar date; a company with a
    shorter series stops contributing after its last period.

    Returns:
        IndustryTrend with one entry per period index up to the longest
        series; empty lists when no company reports the metric
    """
    all_series = [company.series(metric) for company in companies]
    all_series = [series for series in all_series if len(series) > 0]

    if not all_series:
        return IndustryTrend()

    max_length = max(len(series) for series in all_series)
    result = IndustryTrend()

    for period in range(max_length):
        values = values_at_period(all_series, period)
        result.average.append(float(np.mean(values)) if values else 0.0)
        result.median.append(median(values))
        result.top_quartile.append(ascending_rank_quantile(values, 0.75))
        result.bottom_quartile.append(ascending_rank_quantile(values, 0.25))

    return result


def analyze_single_trend(companies: List[Company], metric: str) -> TrendAnalysis:
    """
    Analyze one metric across the portfolio.

    Only companies with at least MIN_TREND_POINTS values appear in the
    per-company map; the map is keyed by company id.

    Raises:
        TrendAnalysisError: If the metric name is not a string
    """
    if not isinstance(metric, str):
        raise TrendAnalysisError(f"Metric name must be a string, got {metric!r}")

    trends = {}
    for company in companies:
        values = company.series(metric)
        if len(values) >= MIN_TREND_POINTS:
            trends[company.id] = company_trend(values)

    logger.debug(f"Trend for {metric}: {len(trends)} of {len(companies)} companies qualify")

    return TrendAnalysis(
        metric=metric,
        companies=trends,
        industry_trend=industry_trend(companies, metric),
    )
