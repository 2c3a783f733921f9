"""
Interest rate with its quoting convention attached.

A bare float rate is ambiguous; InterestRate carries the day count,
compounding and frequency needed to turn it into growth or discount
factors.
"""

from dataclasses import dataclass
from datetime import date

import numpy as np

from .conventions import Compounding, DayCount, Frequency


@dataclass(frozen=True)
class InterestRate:
    """
    Interest rate quoted under a given convention.

    Attributes:
        rate: Rate in decimal (0.05 = 5%)
        day_count: Day count used to measure accrual periods
        compounding: Simple, compounded or continuous
        frequency: Compounding frequency (ONCE for simple rates)
    """
    rate: float
    day_count: DayCount
    compounding: Compounding = Compounding.SIMPLE
    frequency: Frequency = Frequency.ONCE

    def __post_init__(self):
        if self.compounding == Compounding.COMPOUNDED and self.frequency == Frequency.ONCE:
            raise ValueError("Compounded rates need a compounding frequency")

    def compound_factor(self, t: float) -> float:
        """Growth factor over a period of t years."""
        if t < 0:
            raise ValueError(f"Negative time not allowed: {t}")
        if self.compounding == Compounding.SIMPLE:
            return 1.0 + self.rate * t
        if self.compounding == Compounding.CONTINUOUS:
            return float(np.exp(self.rate * t))
        f = self.frequency.value
        return float((1.0 + self.rate / f) ** (f * t))

    def discount_factor(self, t: float) -> float:
        return 1.0 / self.compound_factor(t)

    def compound_factor_between(self, start: date, end: date) -> float:
        """Growth factor between two dates measured with this rate's day count."""
        return self.compound_factor(self.day_count.year_fraction(start, end))

    def discount_factor_between(self, start: date, end: date) -> float:
        return 1.0 / self.compound_factor_between(start, end)

    @classmethod
    def implied_rate(
        cls,
        compound: float,
        day_count: DayCount,
        t: float,
        compounding: Compounding = Compounding.SIMPLE,
        frequency: Frequency = Frequency.ONCE
    ) -> "InterestRate":
        """
        Rate that produces a given growth factor over t years.

        Args:
            compound: Growth factor (must be positive)
            day_count: Day count of the returned rate
            t: Period length in years (must be positive)
            compounding: Compounding of the returned rate
            frequency: Frequency of the returned rate

        Returns:
            InterestRate reproducing the growth factor
        """
        if compound <= 0:
            raise ValueError(f"Positive compound factor required: {compound}")
        if t <= 0:
            raise ValueError(f"Positive time required: {t}")

        if compounding == Compounding.SIMPLE:
            r = (compound - 1.0) / t
        elif compounding == Compounding.CONTINUOUS:
            r = float(np.log(compound)) / t
        else:
            f = frequency.value
            r = (compound ** (1.0 / (f * t)) - 1.0) * f
        return cls(r, day_count, compounding, frequency)

    def equivalent_rate(
        self,
        compounding: Compounding,
        frequency: Frequency,
        t: float
    ) -> "InterestRate":
        """Same growth over t years expressed under another convention."""
        return InterestRate.implied_rate(
            self.compound_factor(t), self.day_count, t, compounding, frequency
        )

    def __float__(self) -> float:
        return float(self.rate)

    def __str__(self) -> str:
        if self.compounding == Compounding.COMPOUNDED:
            desc = f"{self.frequency.name.lower()} compounding"
        else:
            desc = f"{self.compounding.value.lower()} compounding"
        return f"{self.rate * 100:.6f} % {self.day_count} {desc}"


__all__ = ["InterestRate"]
