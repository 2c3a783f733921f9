"""
Unit tests for dates module.
"""

from datetime import date
import pytest

from fralib.conventions import BusinessDayConvention
from fralib.dates import Calendar, Period, TimeUnit, WEEKENDS_ONLY, add_months


class TestPeriod:
    """Tests for tenor parsing."""

    def test_parse_tenor_months(self):
        """Test parsing month tenors."""
        assert Period.parse("3M") == Period(3, TimeUnit.MONTHS)
        assert Period.parse("12M") == Period(12, TimeUnit.MONTHS)

    def test_parse_tenor_other_units(self):
        """Test parsing day, week and year tenors."""
        assert Period.parse("2D") == Period(2, TimeUnit.DAYS)
        assert Period.parse("1W") == Period(1, TimeUnit.WEEKS)
        assert Period.parse("5Y") == Period(5, TimeUnit.YEARS)

    def test_parse_tenor_lowercase_and_sign(self):
        """Lowercase and negative tenors are accepted."""
        assert Period.parse("3m") == Period(3, TimeUnit.MONTHS)
        assert Period.parse("-2D") == Period(-2, TimeUnit.DAYS)
        assert -Period.parse("2D") == Period(-2, TimeUnit.DAYS)

    def test_parse_tenor_invalid(self):
        """Test invalid tenor raises error."""
        with pytest.raises(ValueError):
            Period.parse("invalid")
        with pytest.raises(ValueError):
            Period.parse("3X")

    def test_str(self):
        assert str(Period(6, TimeUnit.MONTHS)) == "6M"


class TestCalendar:
    """Tests for business day calendars."""

    @pytest.fixture
    def calendar(self):
        """Weekends plus Good Friday and Easter Monday 2024."""
        return Calendar("Test", holidays={date(2024, 3, 29), date(2024, 4, 1)})

    def test_weekends(self):
        """Saturday and Sunday are holidays."""
        assert WEEKENDS_ONLY.is_business_day(date(2024, 3, 1))   # Friday
        assert not WEEKENDS_ONLY.is_business_day(date(2024, 3, 2))
        assert not WEEKENDS_ONLY.is_business_day(date(2024, 3, 3))

    def test_holidays(self, calendar):
        assert calendar.is_holiday(date(2024, 3, 29))
        assert not calendar.is_business_day(date(2024, 4, 1))
        assert calendar.is_business_day(date(2024, 4, 2))

    def test_adjust_following(self):
        """Saturday rolls forward to Monday."""
        adj = WEEKENDS_ONLY.adjust(date(2024, 3, 2), BusinessDayConvention.FOLLOWING)
        assert adj == date(2024, 3, 4)

    def test_adjust_modified_following(self):
        """Month end Saturday rolls back to Friday."""
        adj = WEEKENDS_ONLY.adjust(date(2024, 8, 31), BusinessDayConvention.MODIFIED_FOLLOWING)
        assert adj == date(2024, 8, 30)

    def test_adjust_modified_following_with_holidays(self, calendar):
        """Following would cross into April, so roll back past Good Friday."""
        adj = calendar.adjust(date(2024, 3, 30), BusinessDayConvention.MODIFIED_FOLLOWING)
        assert adj == date(2024, 3, 28)

    def test_adjust_preceding(self):
        adj = WEEKENDS_ONLY.adjust(date(2024, 3, 3), BusinessDayConvention.PRECEDING)
        assert adj == date(2024, 3, 1)

    def test_adjust_modified_preceding(self):
        """Month start Sunday would go back into the previous month."""
        adj = WEEKENDS_ONLY.adjust(date(2024, 9, 1), BusinessDayConvention.MODIFIED_PRECEDING)
        assert adj == date(2024, 9, 2)

    def test_adjust_unadjusted(self):
        d = date(2024, 3, 2)
        assert WEEKENDS_ONLY.adjust(d, BusinessDayConvention.UNADJUSTED) == d

    def test_advance_business_days(self, calendar):
        """Day offsets skip weekends and holidays in both directions."""
        assert calendar.advance(date(2024, 3, 28), 1, TimeUnit.DAYS) == date(2024, 4, 2)
        assert calendar.advance(date(2024, 4, 2), -2, TimeUnit.DAYS) == date(2024, 3, 27)
        assert WEEKENDS_ONLY.advance(date(2024, 3, 4), -2, TimeUnit.DAYS) == date(2024, 2, 29)

    def test_advance_zero_days_adjusts(self):
        assert WEEKENDS_ONLY.advance(date(2024, 3, 2), 0, TimeUnit.DAYS) == date(2024, 3, 4)

    def test_advance_months(self):
        """Month offsets clamp the day and then adjust."""
        d = WEEKENDS_ONLY.advance(
            date(2024, 5, 31), 3, TimeUnit.MONTHS, BusinessDayConvention.MODIFIED_FOLLOWING
        )
        assert d == date(2024, 8, 30)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_advance_end_of_month(self):
        """End of month rule keeps month-end dates at month-end."""
        d = WEEKENDS_ONLY.advance_period(
            date(2024, 2, 29), "3M", BusinessDayConvention.MODIFIED_FOLLOWING, end_of_month=True
        )
        assert d == date(2024, 5, 31)
        d = WEEKENDS_ONLY.advance_period(
            date(2024, 2, 29), "3M", BusinessDayConvention.MODIFIED_FOLLOWING
        )
        assert d == date(2024, 5, 29)

    def test_advance_years_and_weeks(self):
        assert WEEKENDS_ONLY.advance(date(2024, 1, 15), 1, TimeUnit.YEARS) == date(2025, 1, 15)
        assert WEEKENDS_ONLY.advance(date(2024, 1, 15), 2, TimeUnit.WEEKS) == date(2024, 1, 29)

    def test_business_days_between(self):
        assert WEEKENDS_ONLY.business_days_between(date(2024, 3, 1), date(2024, 3, 8)) == 5

    def test_equality(self):
        assert Calendar() == WEEKENDS_ONLY
        assert Calendar("X", {date(2024, 1, 1)}) != WEEKENDS_ONLY
