"""
Trend direction and linear forecast utilities.
Pure functions over a single series in chronological order.
"""

import numpy as np
from typing import List, Sequence

from analysis.calculations.volatility import volatility


UPWARD = 'upward'
DOWNWARD = 'downward'
SIDEWAYS = 'sideways'

# Relative change from first to last point that counts as a move
TREND_THRESHOLD = 0.05


def trend_direction(values: Sequence[float], threshold: float = TREND_THRESHOLD) -> str:
    """
    Classify the direction of a series from its first and last point.

    Thresholds:
    - Upward: change >= +5%
    - Downward: change <= -5%
    - Sideways: otherwise

    Args:
        values: Series in chronological order
        threshold: Relative change that counts as a move

    Returns:
        "upward", "downward" or "sideways"; "sideways" when fewer than
        2 points or the first value is zero
    """
    if len(values) < 2:
        return SIDEWAYS

    first = values[0]
    last = values[-1]
    if first == 0:
        return SIDEWAYS

    change = (last - first) / first

    if change >= threshold:
        return UPWARD
    elif change <= -threshold:
        return DOWNWARD
    else:
        return SIDEWAYS


def linear_forecast(values: Sequence[float], periods: int = 2) -> List[float]:
    """
    Least-squares linear fit of value against period index, extended forward.

    slope = (n·Σxy - Σx·Σy) / (n·Σx² - (Σx)²)
    intercept = (Σy - slope·Σx) / n

    Args:
        values: Series in chronological order (index 0 = earliest)
        periods: Number of periods to forecast beyond the last index

    Returns:
        Forecast values for indices n .. n + periods - 1, empty for
        fewer than 2 points

    Example:
        values = [100, 110, 120] -> slope 10, intercept 100
        Returns: [130.0, 140.0]
    """
    n = len(values)
    if n < 2:
        return []

    x = np.arange(n, dtype=float)
    y = np.asarray(values, dtype=float)

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_xx = float((x * x).sum())

    # n >= 2 distinct indices keeps this positive
    denominator = n * sum_xx - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    return [slope * (n + k) + intercept for k in range(periods)]


def forecast_confidence(values: Sequence[float]) -> float:
    """
    Confidence score for a linear forecast based on series dispersion.

    Formula: clamp(1 - σ / mean, 0.3, 0.9)

    Returns:
        Score in [0.3, 0.9]; 0.5 when fewer than 3 points or the
        mean is not positive
    """
    if len(values) < 3:
        return 0.5

    mean = float(np.mean(np.asarray(values, dtype=float)))
    if mean <= 0:
        return 0.5

    coefficient_of_variation = volatility(values) / mean
    return max(0.3, min(0.9, 1 - coefficient_of_variation))
