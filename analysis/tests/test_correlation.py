"""
Tests for positional Pearson correlation.
"""

import pytest

from analysis.calculations.correlation import pearson_correlation


class TestPearsonCorrelation:
    """Tests for pearson_correlation."""

    def test_self_correlation_is_one(self):
        series = [100.0, 120.0, 90.0, 130.0]

        assert pearson_correlation(series, series) == pytest.approx(1.0)

    def test_linear_relationship(self):
        assert pearson_correlation([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_inverse_relationship(self):
        assert pearson_correlation([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == pytest.approx(-1.0)

    def test_symmetric(self):
        a = [1.0, 5.0, 2.0, 8.0]
        b = [3.0, 1.0, 4.0, 1.0]

        assert pearson_correlation(a, b) == pytest.approx(pearson_correlation(b, a))

    def test_known_value(self):
        # a deviations [-1, 0, 1], b deviations [-1, 1, 0]
        # numerator 1, denominator sqrt(2 * 2) = 2
        assert pearson_correlation([1.0, 2.0, 3.0], [1.0, 3.0, 2.0]) == pytest.approx(0.5)

    def test_length_mismatch(self):
        assert pearson_correlation([1.0, 2.0, 3.0], [1.0, 2.0]) == 0.0

    def test_too_short(self):
        assert pearson_correlation([1.0], [1.0]) == 0.0
        assert pearson_correlation([], []) == 0.0

    def test_constant_series(self):
        """Zero variance means zero denominator, which gives 0."""
        assert pearson_correlation([5.0, 5.0, 5.0], [1.0, 2.0, 3.0]) == 0.0
