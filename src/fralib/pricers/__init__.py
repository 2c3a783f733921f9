"""
Pricers package - valuation arithmetic.

Provides the closed-form FRA formulas used by the instruments:
- par forward rate from discount factors
- settlement amount (paid in advance)
- discounting of the settlement amount
"""

from .fra import par_forward_rate, settlement_amount, discounted_value

__all__ = [
    "par_forward_rate",
    "settlement_amount",
    "discounted_value",
]
