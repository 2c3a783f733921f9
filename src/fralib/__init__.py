"""
FraLib: Forward Rate Agreement valuation with lazy recomputation

A small library for:
- Valuing FRAs off an index fixing, an index forwarding curve or a bare
  discount curve
- Keeping results cached until the market data they depend on changes
  (evaluation date, curves, index fixings)

Scope: single-currency FRAs on simple (IBOR-style) rates.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import (
    DayCount,
    BusinessDayConvention,
    Compounding,
    Frequency,
    Position,
    Conventions,
    year_fraction,
)
from .dates import TimeUnit, Period, Calendar, WEEKENDS_ONLY
from .interest_rate import InterestRate

# Notification and caching
from .observer import Observable, Observer
from .lazy import CacheState, LazyObject
from .settings import Settings, saved_settings, has_occurred

# Market data
from .curves import (
    YieldTermStructure,
    FlatForward,
    DiscountCurve,
    create_flat_curve,
    Handle,
    RelinkableHandle,
)
from .indexes import IborIndex, MissingFixingError

# Instruments
from .instruments import Instrument, ForwardRateAgreement, RateConstruction

# Pricers
from .pricers import par_forward_rate, settlement_amount, discounted_value

__all__ = [
    # Version
    "__version__",
    # Conventions
    "DayCount",
    "BusinessDayConvention",
    "Compounding",
    "Frequency",
    "Position",
    "Conventions",
    "year_fraction",
    # Dates
    "TimeUnit",
    "Period",
    "Calendar",
    "WEEKENDS_ONLY",
    "InterestRate",
    # Notification and caching
    "Observable",
    "Observer",
    "CacheState",
    "LazyObject",
    "Settings",
    "saved_settings",
    "has_occurred",
    # Market data
    "YieldTermStructure",
    "FlatForward",
    "DiscountCurve",
    "create_flat_curve",
    "Handle",
    "RelinkableHandle",
    "IborIndex",
    "MissingFixingError",
    # Instruments
    "Instrument",
    "ForwardRateAgreement",
    "RateConstruction",
    # Pricers
    "par_forward_rate",
    "settlement_amount",
    "discounted_value",
]
