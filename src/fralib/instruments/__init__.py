"""
Instruments package - lazily valued contracts.

Provides:
- Instrument: lazy base class with NPV and expiry handling
- ForwardRateAgreement: FRA settled in advance
- RateConstruction: how an FRA obtains its forward rate
"""

from .instrument import Instrument
from .fra import ForwardRateAgreement, RateConstruction

__all__ = [
    "Instrument",
    "ForwardRateAgreement",
    "RateConstruction",
]
