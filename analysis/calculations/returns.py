"""
Returns and growth calculation utilities.
Pure functions over per-period financial series.
"""

from typing import List, Sequence


def period_returns(values: Sequence[float]) -> List[float]:
    """
    Calculate period-over-period simple returns.

    Formula: R_i = (V_i - V_{i-1}) / V_{i-1}

    A step whose base value is zero or negative yields no return,
    so the output may be shorter than len(values) - 1.

    Args:
        values: Series in chronological order

    Returns:
        List of simple returns as decimals (0.05 = 5%)

    Example:
        values = [100, 110, 0, 50]
        - 100 -> 110: 0.10
        - 110 -> 0: -1.0
        - 0 -> 50: skipped (zero base)
        Returns: [0.10, -1.0]
    """
    returns = []
    for i in range(1, len(values)):
        previous = values[i - 1]
        if previous > 0:
            returns.append((values[i] - previous) / previous)
    return returns


def growth_rate(values: Sequence[float]) -> float:
    """
    Compound growth rate implied by the first and last value.

    Formula: g = ((V_last / V_first) ^ (1 / (n - 1)) - 1) * 100

    Args:
        values: Series in chronological order

    Returns:
        Growth rate in percent per period (10.0 = 10%), 0.0 when fewer
        than 2 points, a non-positive first value, or a negative last
        value over more than one period (no real compound rate exists)

    Example:
        values = [100, -50] -> one period, ratio -0.5
        Returns: -150.0
    """
    if len(values) < 2:
        return 0.0

    first = values[0]
    last = values[-1]
    if first <= 0:
        return 0.0

    periods = len(values) - 1
    ratio = last / first
    if periods == 1:
        return (ratio - 1) * 100

    # Fractional root of a negative ratio has no real value
    if ratio < 0:
        return 0.0

    return (ratio ** (1.0 / periods) - 1) * 100
