"""
Unit tests for FRA valuation arithmetic and interest rates.
"""

from datetime import date
import numpy as np
import pytest

from fralib.conventions import Compounding, DayCount, Frequency, Position
from fralib.interest_rate import InterestRate
from fralib.pricers import discounted_value, par_forward_rate, settlement_amount


class TestSettlementAmount:
    """Tests for the settlement-in-advance formula."""

    def test_reference_example(self):
        """1mm notional, 5% strike, 6% forward over a quarter."""
        amount = settlement_amount(1_000_000, Position.LONG, 0.06, 0.05, 0.25)
        expected = 1_000_000 * 0.01 * 0.25 / (1 + 0.06 * 0.25)

        assert abs(amount - expected) < 1e-9
        assert abs(amount - 2463.05) < 0.01

    def test_short_is_mirror_of_long(self):
        long_amount = settlement_amount(5e6, Position.LONG, 0.031, 0.035, 0.5)
        short_amount = settlement_amount(5e6, Position.SHORT, 0.031, 0.035, 0.5)
        assert long_amount < 0
        assert short_amount == -long_amount

    @pytest.mark.parametrize("forward,strike", [
        (0.06, 0.05),
        (0.04, 0.05),
        (0.05, 0.05),
        (-0.002, 0.001),
    ])
    def test_sign_follows_rate_difference(self, forward, strike):
        amount = settlement_amount(1e6, Position.LONG, forward, strike, 0.25)
        assert np.sign(amount) == np.sign(forward - strike)

    def test_in_advance_discounting(self):
        """Settled amount equals the arrears amount discounted at the forward."""
        F, K, tau = 0.045, 0.04, 0.5
        arrears = 1e6 * (F - K) * tau
        amount = settlement_amount(1e6, Position.LONG, F, K, tau)
        assert abs(amount - arrears / (1 + F * tau)) < 1e-9


class TestParForwardRate:
    """Tests for the discount-ratio forward."""

    def test_par_forward(self):
        fwd = par_forward_rate(0.99, 0.98, 0.25)
        assert abs(fwd - (0.99 / 0.98 - 1) / 0.25) < 1e-15

    def test_non_positive_period(self):
        with pytest.raises(ValueError):
            par_forward_rate(0.99, 0.98, 0.0)

    def test_discounted_value(self):
        assert discounted_value(100.0, 0.95) == pytest.approx(95.0)


class TestInterestRate:
    """Tests for InterestRate conversions."""

    def test_simple(self):
        r = InterestRate(0.06, DayCount.THIRTY_360)
        assert r.compound_factor(0.25) == pytest.approx(1.015)
        assert r.compound_factor_between(date(2024, 3, 1), date(2024, 5, 31)) == pytest.approx(1.015)
        assert r.discount_factor(0.25) == pytest.approx(1 / 1.015)

    def test_continuous_and_compounded(self):
        cont = InterestRate(0.05, DayCount.ACT_365, Compounding.CONTINUOUS)
        assert cont.compound_factor(2.0) == pytest.approx(np.exp(0.1))

        semi = InterestRate(0.05, DayCount.ACT_365, Compounding.COMPOUNDED, Frequency.SEMI_ANNUAL)
        assert semi.compound_factor(1.0) == pytest.approx(1.025 ** 2)

    def test_compounded_needs_frequency(self):
        with pytest.raises(ValueError):
            InterestRate(0.05, DayCount.ACT_365, Compounding.COMPOUNDED)

    def test_implied_rate_roundtrip(self):
        r = InterestRate.implied_rate(1.015, DayCount.ACT_360, 0.25)
        assert r.rate == pytest.approx(0.06)
        assert r.compounding == Compounding.SIMPLE

    def test_equivalent_rate(self):
        simple = InterestRate(0.06, DayCount.ACT_360)
        cont = simple.equivalent_rate(Compounding.CONTINUOUS, Frequency.ANNUAL, 0.25)
        assert cont.rate == pytest.approx(np.log(1.015) / 0.25)

    def test_negative_time(self):
        with pytest.raises(ValueError):
            InterestRate(0.05, DayCount.ACT_360).compound_factor(-1.0)

    def test_str(self):
        assert str(InterestRate(0.05, DayCount.ACT_360)) == "5.000000 % ACT/360 simple compounding"
