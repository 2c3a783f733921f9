"""
Unit tests for conventions module.
"""

from datetime import date
import pytest

from fralib.conventions import (
    DayCount,
    BusinessDayConvention,
    Position,
    year_fraction,
    Conventions,
)


class TestDayCount:
    """Tests for day count conventions."""

    def test_act_360(self):
        """Test ACT/360 day count."""
        start = date(2024, 1, 15)
        end = date(2024, 4, 15)  # 91 days

        yf = year_fraction(start, end, DayCount.ACT_360)
        expected = 91 / 360

        assert abs(yf - expected) < 1e-10

    def test_act_365(self):
        """Test ACT/365F day count."""
        start = date(2024, 1, 15)
        end = date(2024, 4, 15)  # 91 days

        yf = DayCount.ACT_365.year_fraction(start, end)
        expected = 91 / 365

        assert abs(yf - expected) < 1e-10

    def test_act_act_within_year(self):
        """ACT/ACT inside a leap year divides by 366."""
        yf = DayCount.ACT_ACT.year_fraction(date(2024, 1, 1), date(2024, 7, 1))
        assert abs(yf - 182 / 366) < 1e-12

    def test_act_act_across_years(self):
        """ACT/ACT splits the period at the year boundary."""
        start = date(2023, 7, 1)
        end = date(2024, 7, 1)

        yf = DayCount.ACT_ACT.year_fraction(start, end)
        expected = 184 / 365 + 182 / 366

        assert abs(yf - expected) < 1e-12

    def test_act_act_full_years(self):
        """Whole calendar years count as exactly one year each."""
        yf = DayCount.ACT_ACT.year_fraction(date(2022, 1, 1), date(2025, 1, 1))
        assert abs(yf - 3.0) < 1e-12

    def test_thirty_360(self):
        """Test 30/360 day count."""
        start = date(2024, 1, 15)
        end = date(2024, 4, 15)  # 3 months

        yf = year_fraction(start, end, DayCount.THIRTY_360)
        expected = 90 / 360  # 3 months * 30 days

        assert abs(yf - expected) < 1e-10

    def test_thirty_360_month_end(self):
        """31st of the month is treated as the 30th when the start is too."""
        yf = DayCount.THIRTY_360.year_fraction(date(2024, 1, 31), date(2024, 3, 31))
        assert abs(yf - 60 / 360) < 1e-12

    def test_year_fraction_same_date(self):
        """Test year fraction for same date returns 0."""
        d = date(2024, 1, 15)
        yf = year_fraction(d, d, DayCount.ACT_360)
        assert yf == 0.0

    def test_year_fraction_is_signed(self):
        """Reversing the dates flips the sign."""
        start = date(2024, 1, 15)
        end = date(2024, 4, 15)
        for dc in DayCount:
            assert dc.year_fraction(end, start) == -dc.year_fraction(start, end)

    def test_from_string(self):
        """Parse common spellings."""
        assert DayCount.from_string("act/360") == DayCount.ACT_360
        assert DayCount.from_string("ACT/365F") == DayCount.ACT_365
        assert DayCount.from_string("30/360") == DayCount.THIRTY_360
        with pytest.raises(ValueError):
            DayCount.from_string("BUS/252")


class TestPosition:
    """Tests for position signs."""

    def test_signs(self):
        assert Position.LONG.sign == 1
        assert Position.SHORT.sign == -1


class TestConventions:
    """Tests for convention presets."""

    def test_usd_sofr_preset(self):
        """Test USD term SOFR FRA conventions."""
        conv = Conventions.usd_sofr_fra()
        assert conv.day_count == DayCount.ACT_360
        assert conv.business_day == BusinessDayConvention.MODIFIED_FOLLOWING
        assert conv.fixing_days == 2
        assert conv.tenor == "3M"

    def test_eur_euribor_preset(self):
        """Test EURIBOR FRA conventions."""
        conv = Conventions.eur_euribor_fra("3M")
        assert conv.tenor == "3M"
        assert conv.end_of_month
