"""
Rank and percentile utilities.

Two different percentile rules are used by the engine and they are not
interchangeable:
- descending_percentile_rank: position of a value among peers sorted
  best-first (benchmarking)
- ascending_rank_quantile: value picked by floor(n * p) from an
  ascending sort (industry quartile series)
"""

import numpy as np
from typing import Sequence


def descending_percentile_rank(value: float, sorted_desc: Sequence[float]) -> float:
    """
    Percentile of a value among peer values sorted in descending order.

    Formula: ((n - k) / n) * 100 where k is the first index whose peer
    value is <= value. Ties resolve to the best-ranked position.

    Args:
        value: Value being ranked
        sorted_desc: Peer values, largest first

    Returns:
        Percentile in [0, 100]; 0.0 when value is below every peer
        or there are no peers

    Example:
        value=15, peers=[20, 15, 10]
        - first peer <= 15 is at index 1
        - percentile = (3 - 1) / 3 * 100 = 66.67
    """
    n = len(sorted_desc)
    for index, peer_value in enumerate(sorted_desc):
        if peer_value <= value:
            return ((n - index) / n) * 100
    return 0.0


def ascending_rank_quantile(values: Sequence[float], p: float) -> float:
    """
    Pick the value at rank floor(n * p) of the ascending-sorted values.

    The index is clamped to the last element, so p = 1.0 returns the max.

    Args:
        values: Unsorted values
        p: Fraction in [0, 1] (0.25 = bottom quartile, 0.75 = top quartile)

    Returns:
        Selected value, 0.0 for no values
    """
    if not values:
        return 0.0

    ordered = sorted(values)
    index = int(len(ordered) * p)
    return ordered[min(index, len(ordered) - 1)]


def median(values: Sequence[float]) -> float:
    """Median; mean of the two middle values for even counts, 0.0 when empty."""
    if len(values) == 0:
        return 0.0

    return float(np.median(np.asarray(values, dtype=float)))
