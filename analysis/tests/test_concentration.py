"""
Tests for portfolio concentration utilities.
Uses tiny weight fixtures where the Herfindahl index is easy to verify by hand.
"""

import pytest

from analysis.calculations.concentration import (
    equal_weights,
    herfindahl_index,
    concentration_interpretation,
)


class TestEqualWeights:
    """Tests for equal weighting."""

    def test_equal_weights_four_companies(self):
        weights = equal_weights(['a', 'b', 'c', 'd'])

        assert weights == {'a': 0.25, 'b': 0.25, 'c': 0.25, 'd': 0.25}

    def test_equal_weights_accepts_generator(self):
        weights = equal_weights(x for x in ['a', 'b'])

        assert weights == {'a': 0.5, 'b': 0.5}

    def test_equal_weights_empty(self):
        """No companies means no weights, not a division by zero."""
        assert equal_weights([]) == {}


class TestHerfindahlIndex:
    """Tests for Herfindahl-Hirschman Index calculation."""

    def test_hhi_equal_weights_is_one_over_n(self):
        for n in [1, 2, 4, 10]:
            weights = equal_weights([f'c{i}' for i in range(n)])
            assert herfindahl_index(weights) == pytest.approx(1.0 / n)

    def test_hhi_unequal_weights(self):
        """Sum of squared weights keeps working for non-equal weighting."""
        # 0.5² + 0.3² + 0.2² = 0.25 + 0.09 + 0.04 = 0.38
        weights = {'a': 0.5, 'b': 0.3, 'c': 0.2}

        assert herfindahl_index(weights) == pytest.approx(0.38)

    def test_hhi_empty(self):
        assert herfindahl_index({}) == 0.0


class TestConcentrationInterpretation:
    """Tests for HHI interpretation."""

    def test_interpretation_levels(self):
        assert concentration_interpretation(0.0) == "No data"
        assert concentration_interpretation(0.1) == "Low concentration (well diversified)"
        assert concentration_interpretation(0.5) == "Moderate concentration"
        assert concentration_interpretation(1.0) == "High concentration"

    def test_interpretation_none(self):
        assert concentration_interpretation(None) == "No data"
