"""
Correlation calculation utilities.
Pure function for positional Pearson correlation between two series.
"""

import math
import numpy as np
from typing import Sequence


def pearson_correlation(values_a: Sequence[float], values_b: Sequence[float]) -> float:
    """
    Pearson correlation of two series compared index by index.

    Formula: ρ = Σ(a_i - ā)(b_i - b̄) / sqrt(Σ(a_i - ā)² · Σ(b_i - b̄)²)

    Args:
        values_a: First series
        values_b: Second series, same length as the first

    Returns:
        Correlation in [-1, 1]; 0.0 when lengths differ, fewer than
        2 points are given, or either series is constant
    """
    if len(values_a) != len(values_b) or len(values_a) < 2:
        return 0.0

    a = np.asarray(values_a, dtype=float)
    b = np.asarray(values_b, dtype=float)

    diff_a = a - a.mean()
    diff_b = b - b.mean()

    numerator = float(np.sum(diff_a * diff_b))
    denominator = math.sqrt(float(np.sum(diff_a ** 2)) * float(np.sum(diff_b ** 2)))

    if denominator <= 0:
        return 0.0

    return numerator / denominator
