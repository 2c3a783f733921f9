"""
IBOR-style floating rate indices.

An IborIndex knows its own conventions (fixing lag, tenor, calendar, day
count), keeps the fixings published so far, and forecasts future fixings
off its forwarding curve:

    fixing(d) = (P(start) / P(end) - 1) / tau(start, end)

where start is the value date of the fixing and end = start + tenor.

Past fixings come from the fixing history only; a missing one is an error,
never silently forecast.
"""

from datetime import date
from typing import Dict, Mapping, Optional, Union
import logging

import pandas as pd

from .conventions import BusinessDayConvention, Conventions, DayCount
from .curves.curve import YieldTermStructure
from .curves.handle import Handle, as_handle
from .dates import Calendar, Period, TimeUnit, WEEKENDS_ONLY
from .observer import Observable, Observer
from .settings import Settings

logger = logging.getLogger(__name__)


class MissingFixingError(LookupError):
    """A fixing in the past was requested but never stored."""


class IborIndex(Observer, Observable):
    """
    Term interest rate index.

    Attributes:
        name: Index family name (e.g., "TermSOFR")
        tenor: Tenor of the underlying deposit
        fixing_days: Business days between fixing and value date
        calendar: Fixing calendar
        business_day_convention: Rule used to roll maturities
        day_count: Accrual day count of the rate
        end_of_month: Month-end value dates mature at month-end
        forwarding_curve: Handle to the curve used for forecasting
    """

    def __init__(
        self,
        name: str,
        tenor: Union[str, Period],
        fixing_days: int,
        calendar: Calendar = WEEKENDS_ONLY,
        business_day_convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING,
        day_count: DayCount = DayCount.ACT_360,
        forwarding_curve: Union[YieldTermStructure, Handle, None] = None,
        end_of_month: bool = False
    ):
        super().__init__()
        if fixing_days < 0:
            raise ValueError(f"fixing_days must be non-negative, got {fixing_days}")
        self.family_name = name
        self.tenor = Period.parse(tenor) if isinstance(tenor, str) else tenor
        self.fixing_days = fixing_days
        self.calendar = calendar
        self.business_day_convention = business_day_convention
        self.day_count = day_count
        self.end_of_month = end_of_month
        self.forwarding_curve: Handle = as_handle(forwarding_curve)
        self._fixings = pd.Series(dtype=float)

        self.register_with(Settings.instance().evaluation_date_subject)
        self.register_with(self.forwarding_curve)

    @property
    def name(self) -> str:
        return f"{self.family_name}{self.tenor} {self.day_count}"

    def update(self) -> None:
        self.notify_observers()

    # Dates

    def is_valid_fixing_date(self, d: date) -> bool:
        return self.calendar.is_business_day(d)

    def fixing_date(self, value_date: date) -> date:
        """Fixing date for a deposit starting on value_date."""
        return self.calendar.advance(value_date, -self.fixing_days, TimeUnit.DAYS)

    def value_date(self, fixing_date: date) -> date:
        """Start date of the deposit fixed on fixing_date."""
        if not self.is_valid_fixing_date(fixing_date):
            raise ValueError(f"Fixing date {fixing_date} is not valid for {self.name}")
        return self.calendar.advance(fixing_date, self.fixing_days, TimeUnit.DAYS)

    def maturity_date(self, value_date: date) -> date:
        """End date of the deposit starting on value_date."""
        return self.calendar.advance_period(
            value_date, self.tenor, self.business_day_convention, self.end_of_month
        )

    # Fixings

    def fixing(self, fixing_date: date, forecast_todays_fixing: bool = False) -> float:
        """
        Index fixing for a given date.

        Args:
            fixing_date: Date the rate is (or was) fixed
            forecast_todays_fixing: Forecast today's fixing even if stored

        Returns:
            Fixing in decimal

        Raises:
            ValueError: If fixing_date is not a valid fixing date
            MissingFixingError: If a past fixing was never stored
        """
        if not self.is_valid_fixing_date(fixing_date):
            raise ValueError(f"Fixing date {fixing_date} is not valid for {self.name}")

        today = Settings.instance().evaluation_date
        if fixing_date > today or (fixing_date == today and forecast_todays_fixing):
            return self.forecast_fixing(fixing_date)

        stored = self.past_fixing(fixing_date)
        if stored is not None:
            return stored
        if fixing_date < today:
            raise MissingFixingError(f"Missing {self.name} fixing for {fixing_date}")
        # Today's fixing not published yet
        return self.forecast_fixing(fixing_date)

    def forecast_fixing(self, fixing_date: date) -> float:
        """Fixing implied by the forwarding curve."""
        start = self.value_date(fixing_date)
        end = self.maturity_date(start)
        curve = self.forwarding_curve.link
        tau = self.day_count.year_fraction(start, end)
        return (curve.discount(start) / curve.discount(end) - 1.0) / tau

    def past_fixing(self, fixing_date: date) -> Optional[float]:
        value = self._fixings.get(pd.Timestamp(fixing_date))
        if value is None or pd.isna(value):
            return None
        return float(value)

    def has_fixing(self, fixing_date: date) -> bool:
        return self.past_fixing(fixing_date) is not None

    def add_fixing(self, fixing_date: date, value: float, force_overwrite: bool = False) -> None:
        """
        Store a published fixing and notify observers.

        Args:
            fixing_date: Fixing date (must be a valid fixing date)
            value: Fixing in decimal
            force_overwrite: Replace a different existing value

        Raises:
            ValueError: On an invalid date or a conflicting existing fixing
        """
        self.add_fixings({fixing_date: value}, force_overwrite)

    def add_fixings(
        self,
        fixings: Union[Mapping[date, float], pd.Series],
        force_overwrite: bool = False
    ) -> None:
        """Store several fixings at once (one notification)."""
        items: Dict[pd.Timestamp, float] = {}
        for d, value in dict(fixings).items():
            ts = pd.Timestamp(d)
            if not self.is_valid_fixing_date(ts.date()):
                raise ValueError(f"{ts.date()} is not a valid {self.name} fixing date")
            existing = self._fixings.get(ts)
            if existing is not None and not force_overwrite and existing != value:
                raise ValueError(
                    f"Duplicated {self.name} fixing for {ts.date()}: "
                    f"{existing} stored, {value} given"
                )
            items[ts] = float(value)

        if not items:
            return
        update = pd.Series(items, dtype=float)
        if not self._fixings.empty:
            update = update.combine_first(self._fixings)
        self._fixings = update.sort_index()
        logger.info("%s: stored %d fixing(s)", self.name, len(items))
        self.notify_observers()

    def clear_fixings(self) -> None:
        self._fixings = pd.Series(dtype=float)
        self.notify_observers()

    @property
    def time_series(self) -> pd.Series:
        """Copy of the stored fixings, indexed by fixing date."""
        return self._fixings.copy()

    # Presets

    @classmethod
    def from_conventions(
        cls,
        name: str,
        conventions: Conventions,
        forwarding_curve: Union[YieldTermStructure, Handle, None] = None,
        calendar: Calendar = WEEKENDS_ONLY
    ) -> "IborIndex":
        return cls(
            name=name,
            tenor=conventions.tenor,
            fixing_days=conventions.fixing_days,
            calendar=calendar,
            business_day_convention=conventions.business_day,
            day_count=conventions.day_count,
            forwarding_curve=forwarding_curve,
            end_of_month=conventions.end_of_month
        )

    @classmethod
    def term_sofr(
        cls,
        tenor: str = "3M",
        forwarding_curve: Union[YieldTermStructure, Handle, None] = None
    ) -> "IborIndex":
        """CME Term SOFR index."""
        return cls.from_conventions("TermSOFR", Conventions.usd_sofr_fra(tenor), forwarding_curve)

    @classmethod
    def euribor(
        cls,
        tenor: str = "6M",
        forwarding_curve: Union[YieldTermStructure, Handle, None] = None
    ) -> "IborIndex":
        """EURIBOR index."""
        return cls.from_conventions("Euribor", Conventions.eur_euribor_fra(tenor), forwarding_curve)

    def __repr__(self) -> str:
        return f"IborIndex({self.name!r}, fixings={len(self._fixings)})"


__all__ = ["IborIndex", "MissingFixingError"]
