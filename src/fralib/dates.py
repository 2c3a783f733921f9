"""
Date utilities for FRA calculations.

Provides:
- Tenor parsing into Period objects ("3M", "2Y")
- Holiday calendars with business day adjustment
- Date advancement by business days, weeks, months and years
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import FrozenSet, Iterable, Optional
import re

from .conventions import BusinessDayConvention


class TimeUnit(Enum):
    """Unit of a date offset."""
    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


@dataclass(frozen=True)
class Period:
    """A signed length of time such as 3M or -2D."""
    length: int
    unit: TimeUnit

    # Tenor regex pattern: optional sign + number + unit (D/W/M/Y)
    TENOR_PATTERN = re.compile(r'^([+-]?\d+)([DWMY])$', re.IGNORECASE)

    @classmethod
    def parse(cls, tenor: str) -> "Period":
        """
        Parse a tenor string.

        Args:
            tenor: Tenor string like "1D", "3M", "2Y"

        Raises:
            ValueError: If tenor format is invalid
        """
        match = cls.TENOR_PATTERN.match(tenor.upper().strip())
        if not match:
            raise ValueError(f"Invalid tenor format: {tenor}. Expected format like '3M', '2Y'")
        return cls(int(match.group(1)), TimeUnit(match.group(2).upper()))

    def __neg__(self) -> "Period":
        return Period(-self.length, self.unit)

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"


class Calendar:
    """
    Business day calendar.

    Saturdays and Sundays are never business days; additional holidays
    are supplied as a set of dates.
    """

    def __init__(self, name: str = "WeekendsOnly", holidays: Optional[Iterable[date]] = None):
        self.name = name
        self._holidays: FrozenSet[date] = frozenset(holidays or ())

    @property
    def holidays(self) -> FrozenSet[date]:
        return self._holidays

    def is_business_day(self, d: date) -> bool:
        # Weekend check (0 = Monday, 5 = Saturday, 6 = Sunday)
        if d.weekday() >= 5:
            return False
        return d not in self._holidays

    def is_holiday(self, d: date) -> bool:
        return not self.is_business_day(d)

    def is_end_of_month(self, d: date) -> bool:
        """True if d is the last business day of its month."""
        return d.month != self.adjust(d + timedelta(days=1), BusinessDayConvention.FOLLOWING).month

    def end_of_month(self, d: date) -> date:
        """Last business day of the month containing d."""
        last = date(d.year, d.month, _days_in_month(d.year, d.month))
        return self.adjust(last, BusinessDayConvention.PRECEDING)

    def adjust(
        self,
        d: date,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING
    ) -> date:
        """
        Adjust a date according to business day convention.

        Args:
            d: Date to adjust
            convention: Business day adjustment rule

        Returns:
            Adjusted date
        """
        if convention == BusinessDayConvention.UNADJUSTED:
            return d

        if convention in (BusinessDayConvention.FOLLOWING,
                          BusinessDayConvention.MODIFIED_FOLLOWING):
            adjusted = d
            while not self.is_business_day(adjusted):
                adjusted += timedelta(days=1)
            # If we crossed into next month, go preceding instead
            if (convention == BusinessDayConvention.MODIFIED_FOLLOWING
                    and adjusted.month != d.month):
                return self.adjust(d, BusinessDayConvention.PRECEDING)
            return adjusted

        if convention in (BusinessDayConvention.PRECEDING,
                          BusinessDayConvention.MODIFIED_PRECEDING):
            adjusted = d
            while not self.is_business_day(adjusted):
                adjusted -= timedelta(days=1)
            if (convention == BusinessDayConvention.MODIFIED_PRECEDING
                    and adjusted.month != d.month):
                return self.adjust(d, BusinessDayConvention.FOLLOWING)
            return adjusted

        raise ValueError(f"Unknown business day convention: {convention}")

    def advance(
        self,
        d: date,
        n: int,
        unit: TimeUnit = TimeUnit.DAYS,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False
    ) -> date:
        """
        Advance a date by n units.

        Day offsets count business days and ignore the convention;
        other units move the calendar date and then adjust it.

        Args:
            d: Starting date
            n: Number of units (may be negative)
            unit: Offset unit
            convention: Business day adjustment for non-day units
            end_of_month: Keep month-end dates at month-end for month/year offsets

        Returns:
            Advanced date
        """
        if unit == TimeUnit.DAYS:
            if n == 0:
                return self.adjust(d, convention)
            step = timedelta(days=1 if n > 0 else -1)
            result = d
            remaining = abs(n)
            while remaining > 0:
                result += step
                while not self.is_business_day(result):
                    result += step
                remaining -= 1
            return result

        if unit == TimeUnit.WEEKS:
            return self.adjust(d + timedelta(weeks=n), convention)

        months = n if unit == TimeUnit.MONTHS else 12 * n
        result = add_months(d, months)
        if end_of_month and self.is_end_of_month(d):
            return self.end_of_month(result)
        return self.adjust(result, convention)

    def advance_period(
        self,
        d: date,
        period: Period,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False
    ) -> date:
        """Advance a date by a Period or tenor string."""
        if isinstance(period, str):
            period = Period.parse(period)
        return self.advance(d, period.length, period.unit, convention, end_of_month)

    def business_days_between(self, start: date, end: date) -> int:
        """Count business days in [start, end)."""
        count = 0
        current = start
        while current < end:
            if self.is_business_day(current):
                count += 1
            current += timedelta(days=1)
        return count

    def __eq__(self, other) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self.name == other.name and self._holidays == other._holidays

    def __hash__(self) -> int:
        return hash((self.name, self._holidays))

    def __repr__(self) -> str:
        return f"Calendar({self.name!r}, holidays={len(self._holidays)})"


WEEKENDS_ONLY = Calendar()


def add_months(start: date, months: int) -> date:
    """Add months, clamping the day of month to the target month length."""
    year = start.year + (start.month + months - 1) // 12
    month = (start.month + months - 1) % 12 + 1
    day = min(start.day, _days_in_month(year, month))
    return date(year, month, day)


def _days_in_month(year: int, month: int) -> int:
    """Return number of days in a month."""
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    elif month in (4, 6, 9, 11):
        return 30
    elif month == 2:
        if (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0):
            return 29
        return 28
    raise ValueError(f"Invalid month: {month}")


__all__ = [
    "TimeUnit",
    "Period",
    "Calendar",
    "WEEKENDS_ONLY",
    "add_months",
]
