"""
FRA valuation arithmetic.

Pricing formulas (settlement in advance):
    F      = (P(T1) / P(T2) - 1) / tau                  par forward rate
    amount = N * sign * (F - K) * tau / (1 + F * tau)   paid at T1
    PV     = amount * P(T1)

The 1 + F*tau denominator discounts the net interest from the end of the
period back to its start, where an FRA settles.
"""

from ..conventions import Position


def par_forward_rate(df_start: float, df_end: float, tau: float) -> float:
    """
    Simple forward rate implied by two discount factors.

    Args:
        df_start: Discount factor to the period start
        df_end: Discount factor to the period end
        tau: Accrual year fraction of the period

    Returns:
        Forward rate (decimal)
    """
    if tau <= 0:
        raise ValueError(f"Accrual period must be positive, got {tau}")
    return (df_start / df_end - 1.0) / tau


def settlement_amount(
    notional: float,
    position: Position,
    forward: float,
    strike: float,
    tau: float
) -> float:
    """
    Cash amount exchanged at the start of the FRA period.

    Args:
        notional: Contract notional
        position: LONG receives forward minus strike, SHORT pays it
        forward: Forward (or fixed) reference rate
        strike: Contract rate
        tau: Year fraction of the period under the forward rate's day count

    Returns:
        Signed settlement amount
    """
    return notional * position.sign * (forward - strike) * tau / (1.0 + forward * tau)


def discounted_value(amount: float, discount_factor: float) -> float:
    """Present value of an amount paid at the discount factor's date."""
    return amount * discount_factor


__all__ = [
    "par_forward_rate",
    "settlement_amount",
    "discounted_value",
]
