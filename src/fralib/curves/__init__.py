"""
Curves package - observable discount curves.

Provides:
- YieldTermStructure: base class with discount / zero / forward queries
- FlatForward: single-rate curve
- DiscountCurve: pillar discount factors with interpolation
- Handle, RelinkableHandle: shared references that forward notifications
"""

from .curve import YieldTermStructure, FlatForward, DiscountCurve, create_flat_curve
from .handle import Handle, RelinkableHandle, as_handle
from .interpolation import (
    Interpolator,
    LinearInterpolator,
    LogLinearInterpolator,
    create_interpolator,
)

__all__ = [
    "YieldTermStructure",
    "FlatForward",
    "DiscountCurve",
    "create_flat_curve",
    "Handle",
    "RelinkableHandle",
    "as_handle",
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
]
