"""
Tests for returns and growth calculation utilities.
Uses tiny series where returns are easy to verify by hand.
"""

import pytest

from analysis.calculations.returns import period_returns, growth_rate


class TestPeriodReturns:
    """Tests for period-over-period simple returns."""

    def test_period_returns_basic(self):
        """Test returns with known values."""
        # 100 -> 110 -> 121: +10% each period
        returns = period_returns([100.0, 110.0, 121.0])

        assert len(returns) == 2
        assert abs(returns[0] - 0.10) < 1e-9
        assert abs(returns[1] - 0.10) < 1e-9

    def test_period_returns_skips_zero_base(self):
        """A zero base contributes no return and shortens the output."""
        # 100 -> 110: 0.10, 110 -> 0: -1.0, 0 -> 50: skipped
        returns = period_returns([100.0, 110.0, 0.0, 50.0])

        assert returns == pytest.approx([0.10, -1.0])

    def test_period_returns_skips_negative_base(self):
        """Negative bases are skipped as well."""
        # -10 -> 5: skipped, 5 -> 10: 1.0
        returns = period_returns([-10.0, 5.0, 10.0])

        assert returns == pytest.approx([1.0])

    def test_period_returns_short_series(self):
        """Fewer than 2 values give no returns."""
        assert period_returns([]) == []
        assert period_returns([100.0]) == []

    def test_period_returns_accepts_tuples(self):
        """Series stored on companies are tuples."""
        assert period_returns((50.0, 75.0)) == pytest.approx([0.5])


class TestGrowthRate:
    """Tests for compound growth rate."""

    def test_growth_rate_constant_growth(self):
        """10% per period over two periods."""
        assert growth_rate([100.0, 110.0, 121.0]) == pytest.approx(10.0)

    def test_growth_rate_decline(self):
        """-10% per period over two periods."""
        assert growth_rate([100.0, 90.0, 81.0]) == pytest.approx(-10.0)

    def test_growth_rate_uses_first_and_last_only(self):
        """Intermediate values do not affect the compound rate."""
        # (144 / 100) ^ (1/2) - 1 = 0.2
        assert growth_rate([100.0, 500.0, 144.0]) == pytest.approx(20.0)

    def test_growth_rate_short_series(self):
        """Fewer than 2 points give 0."""
        assert growth_rate([]) == 0.0
        assert growth_rate([100.0]) == 0.0

    def test_growth_rate_non_positive_first(self):
        """First value zero or negative gives 0."""
        assert growth_rate([0.0, 50.0]) == 0.0
        assert growth_rate([-5.0, 10.0]) == 0.0

    def test_growth_rate_negative_last_single_period(self):
        """One period needs no root, so a negative last value is a plain change."""
        # -50 / 100 - 1 = -1.5
        assert growth_rate([100.0, -50.0]) == pytest.approx(-150.0)

    def test_growth_rate_negative_last_multi_period(self):
        """No real compound rate exists for a negative ratio over several periods."""
        assert growth_rate([100.0, 80.0, -50.0]) == 0.0

    def test_growth_rate_zero_last(self):
        """Falling to zero is a full loss."""
        assert growth_rate([100.0, 0.0]) == pytest.approx(-100.0)
