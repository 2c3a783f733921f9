"""
Forward rate agreement.

An FRA fixes the rate K on a notional N for the period [value date,
maturity date]. At the value date the parties settle the difference
between the reference rate F and K, discounted over the period:

    amount = N * sign * (F - K) * T / (1 + F * T)
    NPV    = amount * P(value date)

How F is obtained is decided once, when the FRA is built:

- INDEXED_COUPON: the index's own fixing for the FRA's fixing date
- PAR_APPROXIMATION: the discount-factor ratio on the index's forwarding
  curve over the FRA period
- CURVE_ONLY: the same ratio on the discount curve, for FRAs built
  without an index

T is measured with the day count of the forward rate, so the rate and the
period it applies to always share a basis.
"""

from datetime import date
from enum import Enum
from typing import Optional, Union

import pandas as pd

from ..conventions import BusinessDayConvention, Compounding, DayCount, Frequency, Position
from ..curves.curve import YieldTermStructure
from ..curves.handle import Handle, as_handle
from ..dates import Calendar, TimeUnit
from ..indexes import IborIndex
from ..interest_rate import InterestRate
from ..pricers.fra import discounted_value, par_forward_rate, settlement_amount
from ..settings import Settings, has_occurred
from .instrument import Instrument

CurveInput = Union[YieldTermStructure, Handle, None]


class RateConstruction(Enum):
    """How an FRA obtains its forward rate."""
    INDEXED_COUPON = "IndexedCoupon"
    PAR_APPROXIMATION = "ParApproximation"
    CURVE_ONLY = "CurveOnly"


class ForwardRateAgreement(Instrument):
    """
    Forward rate agreement settled in advance.

    Built in one of three ways:
        ForwardRateAgreement(value, maturity, position, strike, notional, index)
        ForwardRateAgreement.from_index_tenor(value, position, strike, notional, index)
        ForwardRateAgreement.from_discount_curve(value, maturity, position, strike,
                                                 notional, curve, fixing_days)

    With an index, the calendar, business day convention and day count come
    from the index; otherwise from the discount curve.

    Args:
        value_date: Start of the rate period, when the FRA settles
        maturity_date: End of the rate period (adjusted on construction)
        position: LONG gains when rates rise above the strike
        strike: Contract rate (decimal, simple)
        notional: Contract notional, must be positive
        index: Reference index, or None for a curve-only FRA
        discount_curve: Curve or handle for discounting; if empty the index's
            forwarding curve is used
        use_indexed_coupon: With an index, use its fixing (True) or the par
            approximation on its forwarding curve (False)
        fixing_days: Fixing lag, only for FRAs without an index
        business_day_convention: Only for FRAs without an index

    Raises:
        ValueError: On invalid contract terms
    """

    def __init__(
        self,
        value_date: date,
        maturity_date: date,
        position: Position,
        strike: float,
        notional: float,
        index: Optional[IborIndex] = None,
        discount_curve: CurveInput = None,
        use_indexed_coupon: bool = True,
        fixing_days: Optional[int] = None,
        business_day_convention: Optional[BusinessDayConvention] = None
    ):
        super().__init__()
        if notional <= 0.0:
            raise ValueError(f"notional must be positive, got {notional}")

        discount_handle = as_handle(discount_curve)

        if index is not None:
            if fixing_days is not None or business_day_convention is not None:
                raise ValueError(
                    "fixing_days and business_day_convention are taken from the index"
                )
            construction = (RateConstruction.INDEXED_COUPON if use_indexed_coupon
                            else RateConstruction.PAR_APPROXIMATION)
            day_count = index.day_count
            calendar = index.calendar
            convention = index.business_day_convention
        else:
            if discount_handle.empty:
                raise ValueError("a discount curve is required for an FRA without index")
            if fixing_days is None:
                raise ValueError("fixing_days is required for an FRA without index")
            if fixing_days < 0:
                raise ValueError(f"fixing_days must be non-negative, got {fixing_days}")
            construction = RateConstruction.CURVE_ONLY
            day_count = discount_handle.link.day_count
            calendar = discount_handle.link.calendar
            convention = business_day_convention or BusinessDayConvention.MODIFIED_FOLLOWING

        adjusted_maturity = calendar.adjust(maturity_date, convention)
        if not value_date < adjusted_maturity:
            raise ValueError(
                f"value date {value_date} must be earlier than maturity date {adjusted_maturity}"
            )
        if day_count.year_fraction(value_date, adjusted_maturity) <= 0.0:
            raise ValueError(
                f"{day_count} gives no accrual between {value_date} and {adjusted_maturity}"
            )

        self._position = position
        self._notional = float(notional)
        self._index = index
        self._discount_curve = discount_handle
        self._rate_construction = construction
        self._day_count = day_count
        self._calendar = calendar
        self._business_day_convention = convention
        self._fixing_days = fixing_days
        self._value_date = value_date
        self._maturity_date = adjusted_maturity
        self._strike = InterestRate(strike, day_count, Compounding.SIMPLE, Frequency.ONCE)

        self._forward_rate: Optional[InterestRate] = None
        self._amount = 0.0

        self.register_with(Settings.instance().evaluation_date_subject)
        self.register_with(self._discount_curve)
        self.register_with(self._index)

    @classmethod
    def from_index_tenor(
        cls,
        value_date: date,
        position: Position,
        strike: float,
        notional: float,
        index: IborIndex,
        discount_curve: CurveInput = None,
        use_indexed_coupon: bool = True
    ) -> "ForwardRateAgreement":
        """FRA whose maturity is the index tenor after the value date."""
        return cls(
            value_date,
            index.maturity_date(value_date),
            position,
            strike,
            notional,
            index=index,
            discount_curve=discount_curve,
            use_indexed_coupon=use_indexed_coupon
        )

    @classmethod
    def from_discount_curve(
        cls,
        value_date: date,
        maturity_date: date,
        position: Position,
        strike: float,
        notional: float,
        discount_curve: Union[YieldTermStructure, Handle],
        fixing_days: int,
        business_day_convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING
    ) -> "ForwardRateAgreement":
        """FRA without index, forwarding and discounting on one curve."""
        return cls(
            value_date,
            maturity_date,
            position,
            strike,
            notional,
            discount_curve=discount_curve,
            fixing_days=fixing_days,
            business_day_convention=business_day_convention
        )

    # Contract terms

    @property
    def value_date(self) -> date:
        return self._value_date

    @property
    def maturity_date(self) -> date:
        return self._maturity_date

    @property
    def position(self) -> Position:
        return self._position

    @property
    def strike(self) -> InterestRate:
        return self._strike

    @property
    def notional(self) -> float:
        return self._notional

    @property
    def day_count(self) -> DayCount:
        return self._day_count

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def business_day_convention(self) -> BusinessDayConvention:
        return self._business_day_convention

    @property
    def index(self) -> Optional[IborIndex]:
        return self._index

    @property
    def discount_curve(self) -> Handle:
        return self._discount_curve

    @property
    def rate_construction(self) -> RateConstruction:
        return self._rate_construction

    def fixing_date(self) -> date:
        if self._index is not None:
            return self._index.fixing_date(self._value_date)
        return self._calendar.advance(
            self._value_date, -self._fixing_days, TimeUnit.DAYS, self._business_day_convention
        )

    # Results

    def is_expired(self) -> bool:
        return has_occurred(self._value_date)

    def amount(self) -> float:
        """Settlement amount paid at the value date (0 once expired)."""
        self.calculate()
        return self._amount

    def forward_rate(self) -> InterestRate:
        """Reference rate for the FRA period, with its day count."""
        self.calculate()
        return self._forward_rate

    def setup_expired(self) -> None:
        super().setup_expired()
        self._amount = 0.0
        # Still reported for information
        self._calculate_forward_rate()

    def perform_calculations(self) -> None:
        self._calculate_amount()
        if self._discount_curve.empty:
            discount = self._index.forwarding_curve.link
        else:
            discount = self._discount_curve.link
        self._npv = discounted_value(self._amount, discount.discount(self._value_date))

    def _calculate_forward_rate(self) -> None:
        construction = self._rate_construction
        if construction is RateConstruction.INDEXED_COUPON:
            fixing = self._index.fixing(self.fixing_date())
            day_count = self._index.day_count
        elif construction is RateConstruction.PAR_APPROXIMATION:
            curve = self._index.forwarding_curve.link
            day_count = self._index.day_count
            fixing = self._par_rate(curve, day_count)
        else:
            curve = self._discount_curve.link
            day_count = curve.day_count
            fixing = self._par_rate(curve, day_count)
        self._forward_rate = InterestRate(fixing, day_count, Compounding.SIMPLE, Frequency.ONCE)

    def _par_rate(self, curve: YieldTermStructure, day_count: DayCount) -> float:
        return par_forward_rate(
            curve.discount(self._value_date),
            curve.discount(self._maturity_date),
            day_count.year_fraction(self._value_date, self._maturity_date)
        )

    def _calculate_amount(self) -> None:
        self._calculate_forward_rate()
        F = self._forward_rate.rate
        K = self._strike.rate
        T = self._forward_rate.day_count.year_fraction(self._value_date, self._maturity_date)
        self._amount = settlement_amount(self._notional, self._position, F, K, T)

    def summary(self) -> pd.Series:
        """Contract terms and current results as a Series."""
        forward = self.forward_rate()
        return pd.Series({
            'value_date': self._value_date,
            'maturity_date': self._maturity_date,
            'fixing_date': self.fixing_date(),
            'position': self._position.name,
            'notional': self._notional,
            'strike': self._strike.rate,
            'rate_construction': self._rate_construction.value,
            'forward_rate': forward.rate,
            'forward_day_count': str(forward.day_count),
            'amount': self.amount(),
            'npv': self.npv(),
            'expired': self.is_expired(),
        })

    def __repr__(self) -> str:
        return (f"ForwardRateAgreement({self._position.name}, {self._value_date} -> "
                f"{self._maturity_date}, K={self._strike.rate:.6f}, N={self._notional:,.0f}, "
                f"{self._rate_construction.value})")


__all__ = ["ForwardRateAgreement", "RateConstruction"]
