"""
Display formatters for portfolio analysis results.
Deterministic string formatting for percentages, ratios, currency and summaries.
"""

from typing import List, Optional

from analysis.models import PortfolioMetrics, BenchmarkingResult, TrendAnalysis
from analysis.calculations.concentration import concentration_interpretation


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def format_percent(value: Optional[float], decimal_places: int = 1) -> str:
    """
    Format a value already expressed in percent.

    Args:
        value: Percent value (12.5 = 12.5%)
        decimal_places: Number of decimal places (default: 1)

    Returns:
        Formatted percentage string (e.g., "12.5%")
    """
    if value is None:
        return "Not available"

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Percentage value must be numeric, got {type(value)}")

    return f"{value:.{decimal_places}f}%"


def format_ratio(value: Optional[float], decimal_places: int = 2) -> str:
    """Format a plain ratio (e.g., "1.35")."""
    if value is None:
        return "Not available"

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Ratio value must be numeric, got {type(value)}")

    return f"{value:.{decimal_places}f}"


def format_currency(value: Optional[float], force_scale: Optional[str] = None) -> str:
    """
    Format currency with appropriate scale (B/M/K).

    Args:
        value: Dollar amount
        force_scale: Force specific scale ('B', 'M', 'K', None)

    Returns:
        Formatted currency string (e.g., "$12.3B", "$1,234")
    """
    if value is None:
        return "Not available"

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Currency value must be numeric, got {type(value)}")

    if value == 0:
        return "$0"

    abs_value = abs(value)
    sign = "-" if value < 0 else ""

    if force_scale == 'B':
        return f"{sign}${abs_value/1e9:.1f}B"
    elif force_scale == 'M':
        return f"{sign}${abs_value/1e6:.1f}M"
    elif force_scale == 'K':
        return f"{sign}${abs_value/1e3:.1f}K"

    # Auto-scale based on magnitude
    if abs_value >= 1e9:
        return f"{sign}${abs_value/1e9:.1f}B"
    elif abs_value >= 1e6:
        return f"{sign}${abs_value/1e6:.1f}M"
    elif abs_value >= 1e3:
        return f"{sign}${abs_value:,.0f}"
    else:
        return f"{sign}${abs_value:.2f}"


def format_portfolio_summary(metrics: PortfolioMetrics) -> List[str]:
    """Summary lines for a portfolio, one figure per line."""
    industries = ', '.join(
        f"{name} ({summary.count})" for name, summary in metrics.industry_breakdown.items()
    )

    lines = [
        f"Companies: {len(metrics.volatilities)}",
        f"Industries: {industries or 'none'}",
        f"Total revenue (latest): {format_currency(metrics.total_revenue)}",
        f"Portfolio volatility: {format_ratio(metrics.portfolio_volatility, 4)}",
        f"Diversification ratio: {format_ratio(metrics.diversification_ratio)}",
        f"Concentration risk: {format_ratio(metrics.concentration_risk)} "
        f"({concentration_interpretation(metrics.concentration_risk)})",
        f"Weighted ROE: {format_percent(metrics.weighted_average_roe)}",
        f"Weighted ROA: {format_percent(metrics.weighted_average_roa)}",
        f"Revenue growth: {format_percent(metrics.portfolio_growth_rate)}",
        f"Risk-adjusted return: {format_ratio(metrics.risk_adjusted_return)}",
    ]

    for performer in metrics.top_performers:
        lines.append(
            f"Top performer #{performer.rank}: {performer.company} "
            f"{performer.metric} {format_percent(performer.value)}"
        )

    for item in metrics.underperformers:
        lines.append(f"Watch ({item.severity}): {item.company} - {item.issue}")

    return lines


def format_benchmark_line(result: BenchmarkingResult) -> str:
    """One-line benchmark summary, e.g. "Acme: rank 2/5, strengths: ROE"."""
    line = f"{result.company}: rank {result.overall_rank}/{result.total_companies}"

    if not result.metrics:
        return f"{line}, no industry peers"

    if result.strength_areas:
        line += f", strengths: {', '.join(result.strength_areas)}"
    if result.improvement_areas:
        line += f", improve: {', '.join(result.improvement_areas)}"
    return line


def format_trend_lines(analysis: TrendAnalysis) -> List[str]:
    """Per-company trend lines for one metric."""
    if not analysis.companies:
        return [f"{analysis.metric}: no company has 2 or more periods"]

    lines = [f"{analysis.metric}:"]
    for company_id, trend in analysis.companies.items():
        forecast = ', '.join(format_ratio(v, 1) for v in trend.forecast)
        lines.append(
            f"  {company_id}: {trend.trend}, next periods [{forecast}], "
            f"confidence {format_ratio(trend.confidence)}"
        )
    return lines
