"""
Volatility calculation utilities.
Pure functions for series dispersion and equal-weight portfolio volatility.
"""

import math
import numpy as np
from typing import Dict, Mapping, Optional, Sequence


def volatility(values: Sequence[float]) -> float:
    """
    Population standard deviation of a series.

    Formula: σ = sqrt(Σ(v_i - mean)² / n)

    Applied to raw values, not their returns; callers wanting return
    volatility pass the output of period_returns().

    Args:
        values: Series of numbers

    Returns:
        Standard deviation, 0.0 for fewer than 2 values
    """
    if len(values) < 2:
        return 0.0

    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def portfolio_volatility(
    volatilities: Mapping[str, float],
    correlations: Mapping[str, Mapping[str, float]],
    weights: Optional[Mapping[str, float]] = None
) -> float:
    """
    Portfolio volatility from individual volatilities and pairwise correlation.

    Formula: σ_p = sqrt(Σ_i Σ_j w_i w_j σ_i σ_j ρ_ij)

    Args:
        volatilities: Company id -> volatility
        correlations: Company id -> company id -> correlation
        weights: Company id -> weight (defaults to 1/N each)

    Returns:
        Portfolio volatility, 0.0 for an empty portfolio
    """
    ids = list(volatilities.keys())
    n = len(ids)
    if n == 0:
        return 0.0

    if weights is None:
        weights = {company_id: 1.0 / n for company_id in ids}

    variance = 0.0
    for id_i in ids:
        for id_j in ids:
            corr = correlations.get(id_i, {}).get(id_j, 0.0)
            variance += (
                weights.get(id_i, 0.0) * weights.get(id_j, 0.0)
                * volatilities[id_i] * volatilities[id_j] * corr
            )

    # Zero-filled correlations for mismatched series can make the sum negative
    return math.sqrt(max(variance, 0.0))


def diversification_ratio(
    volatilities: Mapping[str, float],
    portfolio_vol: float
) -> float:
    """
    Average individual volatility over portfolio volatility.

    Returns:
        Ratio (> 1 means diversification benefit), 0.0 when portfolio
        volatility is zero or no volatilities are given
    """
    if portfolio_vol <= 0 or not volatilities:
        return 0.0

    avg_vol = float(np.mean(list(volatilities.values())))
    return avg_vol / portfolio_vol
