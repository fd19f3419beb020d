"""
Financial ratio utilities.
Pure functions over the latest reported period of a company's series.
"""

from typing import Sequence

from analysis.models import (
    Company,
    REVENUE,
    NET_INCOME,
    TOTAL_ASSETS,
    SHAREHOLDERS_EQUITY,
)


def latest_value(values: Sequence[float]) -> float:
    """Most recent value of a series, 0.0 when empty."""
    return values[-1] if len(values) > 0 else 0.0


def return_on_equity(company: Company) -> float:
    """
    ROE = Net Income / Shareholders Equity * 100

    Returns:
        ROE in percent, 0.0 when equity is zero or negative
    """
    net_income = latest_value(company.series(NET_INCOME))
    equity = latest_value(company.series(SHAREHOLDERS_EQUITY))
    return (net_income / equity) * 100 if equity > 0 else 0.0


def return_on_assets(company: Company) -> float:
    """
    ROA = Net Income / Total Assets * 100

    Returns:
        ROA in percent, 0.0 when assets are zero or negative
    """
    net_income = latest_value(company.series(NET_INCOME))
    assets = latest_value(company.series(TOTAL_ASSETS))
    return (net_income / assets) * 100 if assets > 0 else 0.0


def net_margin(company: Company) -> float:
    """Net Income / Revenue * 100, 0.0 when revenue is zero or negative."""
    revenue = latest_value(company.series(REVENUE))
    net_income = latest_value(company.series(NET_INCOME))
    return (net_income / revenue) * 100 if revenue > 0 else 0.0


def asset_turnover(company: Company) -> float:
    """Revenue / Total Assets, 0.0 when assets are zero or negative."""
    revenue = latest_value(company.series(REVENUE))
    assets = latest_value(company.series(TOTAL_ASSETS))
    return revenue / assets if assets > 0 else 0.0
