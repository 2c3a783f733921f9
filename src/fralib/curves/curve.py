"""
Observable yield term structures.

The YieldTermStructure base provides:
- Discount factor P(ref, t) for a date or a year fraction
- Zero rate z(t)
- Forward rate f(t1, t2) as an InterestRate

A curve either has a fixed reference date or follows the global evaluation
date (plus settlement days). A moving curve registers with the evaluation
date and passes its notifications on, so instruments priced off it are
invalidated when the date moves.

Concrete curves:
- FlatForward: a single rate, settable (notifies observers)
- DiscountCurve: discount factors at pillar dates with interpolation
"""

from abc import abstractmethod
from datetime import date
from typing import List, Optional, Sequence, Union
import logging

import numpy as np

from ..conventions import Compounding, DayCount, Frequency
from ..dates import Calendar, TimeUnit, WEEKENDS_ONLY, add_months
from ..interest_rate import InterestRate
from ..observer import Observable, Observer
from ..settings import Settings
from .interpolation import Interpolator, LogLinearInterpolator, create_interpolator

logger = logging.getLogger(__name__)

DateOrTime = Union[date, float]


class YieldTermStructure(Observer, Observable):
    """
    Base class for discount curves.

    Attributes:
        day_count: Day count for the curve's time axis
        calendar: Calendar used to roll the moving reference date
        settlement_days: Business days from evaluation date to reference date
    """

    def __init__(
        self,
        day_count: DayCount = DayCount.ACT_365,
        calendar: Calendar = WEEKENDS_ONLY,
        reference_date: Optional[date] = None,
        settlement_days: int = 0
    ):
        super().__init__()
        self.day_count = day_count
        self.calendar = calendar
        self.settlement_days = settlement_days
        self._reference_date = reference_date
        if reference_date is None:
            self.register_with(Settings.instance().evaluation_date_subject)

    @property
    def moving(self) -> bool:
        return self._reference_date is None

    @property
    def reference_date(self) -> date:
        if self._reference_date is not None:
            return self._reference_date
        today = Settings.instance().evaluation_date
        return self.calendar.advance(today, self.settlement_days, TimeUnit.DAYS)

    def time_from_reference(self, d: date) -> float:
        return self.day_count.year_fraction(self.reference_date, d)

    def _to_time(self, t: DateOrTime) -> float:
        if isinstance(t, date):
            return self.time_from_reference(t)
        return float(t)

    def discount(self, t: DateOrTime) -> float:
        """
        Get discount factor P(ref, t).

        Args:
            t: Year fraction or date

        Returns:
            Discount factor
        """
        return float(self._discount_impl(self._to_time(t)))

    def zero_rate(
        self,
        t: DateOrTime,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL
    ) -> InterestRate:
        """
        Get zero rate z(t).

        Args:
            t: Year fraction or date
            compounding: Compounding convention for output
            frequency: Frequency for compounded output

        Returns:
            Zero rate over the curve day count
        """
        time = self._to_time(t)
        if time <= 0:
            # Short end: use a one-day rate
            time = 1.0 / 365.0
        if compounding == Compounding.SIMPLE:
            frequency = Frequency.ONCE
        return InterestRate.implied_rate(
            1.0 / self.discount(time), self.day_count, time, compounding, frequency
        )

    def forward_rate(
        self,
        start: date,
        end: date,
        day_count: Optional[DayCount] = None,
        compounding: Compounding = Compounding.SIMPLE,
        frequency: Frequency = Frequency.ONCE
    ) -> InterestRate:
        """
        Get forward rate between two dates.

        Args:
            start: Start date
            end: End date
            day_count: Day count of the returned rate (defaults to the curve's)
            compounding: Compounding convention

        Returns:
            Forward rate as an InterestRate
        """
        if end <= start:
            raise ValueError("end must be later than start")
        day_count = day_count or self.day_count
        compound = self.discount(start) / self.discount(end)
        return InterestRate.implied_rate(
            compound, day_count, day_count.year_fraction(start, end), compounding, frequency
        )

    def update(self) -> None:
        self.notify_observers()

    @abstractmethod
    def _discount_impl(self, t: float) -> float:
        """Discount factor for a year fraction from the reference date."""


class FlatForward(YieldTermStructure):
    """
    Curve with a single forward rate.

    The rate can be changed in place with set_rate(), which notifies
    every observer.
    """

    def __init__(
        self,
        rate: float,
        day_count: DayCount = DayCount.ACT_365,
        compounding: Compounding = Compounding.CONTINUOUS,
        frequency: Frequency = Frequency.ANNUAL,
        calendar: Calendar = WEEKENDS_ONLY,
        reference_date: Optional[date] = None,
        settlement_days: int = 0
    ):
        super().__init__(day_count, calendar, reference_date, settlement_days)
        self._compounding = compounding
        self._frequency = frequency if compounding == Compounding.COMPOUNDED else Frequency.ONCE
        self._rate = InterestRate(rate, day_count, compounding, self._frequency)

    @property
    def rate(self) -> InterestRate:
        return self._rate

    def set_rate(self, rate: float) -> None:
        if rate == self._rate.rate:
            return
        logger.debug("FlatForward rate %s -> %s", self._rate.rate, rate)
        self._rate = InterestRate(rate, self.day_count, self._compounding, self._frequency)
        self.notify_observers()

    def _discount_impl(self, t: float) -> float:
        if t < 0:
            return 1.0 / self._rate.discount_factor(-t)
        return self._rate.discount_factor(t)

    def __repr__(self) -> str:
        ref = "moving" if self.moving else self.reference_date.isoformat()
        return f"FlatForward({self._rate}, ref={ref})"


class DiscountCurve(YieldTermStructure):
    """
    Curve of discount factors at pillar dates.

    The first pillar is the reference date and must carry a discount factor
    of 1. Between pillars the curve interpolates either log discount
    factors ("log_linear", piecewise flat forwards) or continuously
    compounded zero rates ("linear_zero").
    """

    def __init__(
        self,
        dates: Sequence[date],
        discount_factors: Sequence[float],
        day_count: DayCount = DayCount.ACT_365,
        calendar: Calendar = WEEKENDS_ONLY,
        interpolation_method: str = "log_linear"
    ):
        if len(dates) != len(discount_factors):
            raise ValueError("dates and discount factors must have same length")
        if len(dates) < 2:
            raise ValueError("Need at least 2 pillars to build curve")
        if any(d2 <= d1 for d1, d2 in zip(dates, dates[1:])):
            raise ValueError("Pillar dates must be strictly increasing")
        if abs(discount_factors[0] - 1.0) > 1e-12:
            raise ValueError("Discount factor at the reference date must be 1.0")
        if any(df <= 0 for df in discount_factors):
            raise ValueError("Discount factors must be positive")

        super().__init__(day_count, calendar, reference_date=dates[0])
        self.interpolation_method = interpolation_method
        self._dates: List[date] = list(dates)
        self._dfs: List[float] = [float(df) for df in discount_factors]
        self._interpolator: Optional[Interpolator] = None
        self._build()

    @property
    def dates(self) -> List[date]:
        return list(self._dates)

    @property
    def discount_factors(self) -> List[float]:
        return list(self._dfs)

    def times(self) -> np.ndarray:
        return np.array([self.time_from_reference(d) for d in self._dates])

    def _build(self) -> None:
        times = self.times()
        dfs = np.array(self._dfs)
        self._interpolator = create_interpolator(self.interpolation_method)
        if isinstance(self._interpolator, LogLinearInterpolator):
            self._interpolator.fit(times, dfs)
        else:
            zero_rates = np.empty_like(dfs)
            zero_rates[1:] = -np.log(dfs[1:]) / times[1:]
            # Node at t=0 takes the first pillar's rate
            zero_rates[0] = zero_rates[1]
            self._interpolator.fit(times, zero_rates)

    def set_discount(self, d: date, discount_factor: float) -> None:
        """
        Set (or insert) a pillar and notify observers.

        Args:
            d: Pillar date, after the reference date
            discount_factor: Discount factor P(ref, d)
        """
        if d <= self._dates[0]:
            raise ValueError("Pillars can only be set after the reference date")
        if discount_factor <= 0:
            raise ValueError(f"Invalid discount factor: {discount_factor}")

        if d in self._dates:
            self._dfs[self._dates.index(d)] = float(discount_factor)
        else:
            idx = int(np.searchsorted(np.array([x.toordinal() for x in self._dates]), d.toordinal()))
            self._dates.insert(idx, d)
            self._dfs.insert(idx, float(discount_factor))
        self._build()
        logger.debug("DiscountCurve pillar %s set to %s", d, discount_factor)
        self.notify_observers()

    def bump_parallel(self, bp: float) -> "DiscountCurve":
        """
        Create a new curve with a parallel zero rate bump.

        Args:
            bp: Bump size in basis points

        Returns:
            New bumped curve (this curve is unchanged)
        """
        bump = bp / 10000.0
        times = self.times()
        dfs = [df * float(np.exp(-bump * t)) for df, t in zip(self._dfs, times)]
        return DiscountCurve(
            self._dates, dfs, self.day_count, self.calendar, self.interpolation_method
        )

    def _discount_impl(self, t: float) -> float:
        if isinstance(self._interpolator, LogLinearInterpolator):
            return float(np.exp(self._interpolator(t)))
        return float(np.exp(-self._interpolator(t) * t))

    def __repr__(self) -> str:
        return (f"DiscountCurve(ref={self.reference_date}, pillars={len(self._dates)}, "
                f"method={self.interpolation_method})")


def create_flat_curve(
    anchor_date: date,
    rate: float,
    day_count: DayCount = DayCount.ACT_365,
    max_tenor_years: int = 30
) -> DiscountCurve:
    """
    Create a flat pillar curve.

    Args:
        anchor_date: Reference date
        rate: Flat continuously compounded rate
        day_count: Curve day count
        max_tenor_years: Last pillar in years

    Returns:
        Flat DiscountCurve
    """
    dates = [anchor_date]
    for months in [3, 6, 12, 24, 60, 120, 240, 12 * max_tenor_years]:
        d = add_months(anchor_date, months)
        if d > dates[-1]:
            dates.append(d)
    dfs = [float(np.exp(-rate * day_count.year_fraction(anchor_date, d))) for d in dates]
    return DiscountCurve(dates, dfs, day_count, interpolation_method="log_linear")


__all__ = [
    "YieldTermStructure",
    "FlatForward",
    "DiscountCurve",
    "create_flat_curve",
]
