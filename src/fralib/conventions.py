"""
Day count conventions, business day rules and market enumerations.

Supported Day Counts:
- ACT/360: Actual days / 360 (money markets, SOFR, EURIBOR)
- ACT/365F: Actual days / 365 (GBP, curve time axes)
- ACT/ACT: ISDA actual/actual, split at year boundaries
- 30/360: US (bond basis)

Business Day Conventions:
- Following: Move to next business day
- Modified Following: Following, unless it crosses a month end (then preceding)
- Preceding: Move to previous business day
- Modified Preceding: Preceding, unless it crosses a month start (then following)
- Unadjusted: Leave the date alone
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
import calendar


class DayCount(Enum):
    """Day count convention enumeration."""
    ACT_360 = "ACT/360"
    ACT_365 = "ACT/365F"
    ACT_ACT = "ACT/ACT"
    THIRTY_360 = "30/360"

    @classmethod
    def from_string(cls, s: str) -> "DayCount":
        """Parse day count from string representation."""
        mapping = {
            "ACT/360": cls.ACT_360,
            "ACT360": cls.ACT_360,
            "ACT/365": cls.ACT_365,
            "ACT/365F": cls.ACT_365,
            "ACT365": cls.ACT_365,
            "ACT/ACT": cls.ACT_ACT,
            "ACTACT": cls.ACT_ACT,
            "30/360": cls.THIRTY_360,
            "30360": cls.THIRTY_360,
        }
        key = s.upper().replace(" ", "")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown day count convention: {s}")

    def day_count(self, start: date, end: date) -> int:
        """Number of days between two dates under this convention."""
        if self is DayCount.THIRTY_360:
            d1, d2 = _thirty_360_days(start, end)
            return 360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)
        return (end - start).days

    def year_fraction(self, start: date, end: date) -> float:
        """
        Year fraction between two dates.

        The result is signed: swapping the dates flips the sign.
        """
        if start == end:
            return 0.0
        if start > end:
            return -self.year_fraction(end, start)

        if self is DayCount.ACT_360:
            return (end - start).days / 360.0
        if self is DayCount.ACT_365:
            return (end - start).days / 365.0
        if self is DayCount.ACT_ACT:
            return _act_act_isda(start, end)
        if self is DayCount.THIRTY_360:
            return self.day_count(start, end) / 360.0
        raise ValueError(f"Unknown day count: {self}")

    def __str__(self) -> str:
        return self.value


class BusinessDayConvention(Enum):
    """Business day adjustment convention."""
    FOLLOWING = "Following"
    MODIFIED_FOLLOWING = "ModifiedFollowing"
    PRECEDING = "Preceding"
    MODIFIED_PRECEDING = "ModifiedPreceding"
    UNADJUSTED = "Unadjusted"


class Compounding(Enum):
    """Interest rate compounding convention."""
    SIMPLE = "Simple"
    COMPOUNDED = "Compounded"
    CONTINUOUS = "Continuous"


class Frequency(Enum):
    """Compounding frequency, as periods per year."""
    ONCE = 0
    ANNUAL = 1
    SEMI_ANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12


class Position(Enum):
    """Side of a forward contract."""
    LONG = 1
    SHORT = -1

    @property
    def sign(self) -> int:
        return self.value


@dataclass(frozen=True)
class Conventions:
    """
    Container for FRA market conventions.

    Attributes:
        day_count: Accrual day count of the reference rate
        business_day: Business day adjustment rule
        fixing_days: Business days between fixing and value date
        tenor: Tenor of the reference rate
        end_of_month: Whether month-end value dates roll to month-end maturities
    """
    day_count: DayCount = DayCount.ACT_360
    business_day: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING
    fixing_days: int = 2
    tenor: str = "3M"
    end_of_month: bool = False

    @classmethod
    def usd_sofr_fra(cls, tenor: str = "3M") -> "Conventions":
        """USD term SOFR FRA conventions."""
        return cls(
            day_count=DayCount.ACT_360,
            business_day=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixing_days=2,
            tenor=tenor,
            end_of_month=False
        )

    @classmethod
    def eur_euribor_fra(cls, tenor: str = "6M") -> "Conventions":
        """EUR EURIBOR FRA conventions."""
        return cls(
            day_count=DayCount.ACT_360,
            business_day=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixing_days=2,
            tenor=tenor,
            end_of_month=True
        )


def year_fraction(start: date, end: date, day_count: DayCount) -> float:
    """
    Calculate year fraction between two dates using specified day count convention.

    Args:
        start: Start date
        end: End date
        day_count: Day count convention

    Returns:
        Year fraction as float (negative if end precedes start)
    """
    return day_count.year_fraction(start, end)


def _thirty_360_days(start: date, end: date):
    d1 = min(start.day, 30)
    d2 = end.day
    if d2 == 31 and d1 == 30:
        d2 = 30
    return d1, d2


def _act_act_isda(start: date, end: date) -> float:
    # Days in each calendar year are weighted by that year's length
    if start.year == end.year:
        return (end - start).days / (366.0 if calendar.isleap(start.year) else 365.0)

    total = (date(start.year + 1, 1, 1) - start).days / (
        366.0 if calendar.isleap(start.year) else 365.0
    )
    total += end.year - start.year - 1
    total += (end - date(end.year, 1, 1)).days / (
        366.0 if calendar.isleap(end.year) else 365.0
    )
    return total


__all__ = [
    "DayCount",
    "BusinessDayConvention",
    "Compounding",
    "Frequency",
    "Position",
    "Conventions",
    "year_fraction",
]
