"""
Interpolation methods for discount curves.

Provides:
- LinearInterpolator: Linear interpolation with flat extrapolation
  (used on continuously compounded zero rates)
- LogLinearInterpolator: Linear interpolation of log discount factors,
  i.e. piecewise constant forward rates

All interpolators work with year fractions as x-coordinates.
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class Interpolator(ABC):
    """Abstract base class for curve interpolation."""

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.values: Optional[np.ndarray] = None

    def fit(self, times: np.ndarray, values: np.ndarray) -> None:
        """
        Fit the interpolator to data points.

        Args:
            times: Array of year fractions
            values: Array of values (meaning depends on the subclass)
        """
        if len(times) != len(values):
            raise ValueError("Times and values must have same length")
        if len(times) < 2:
            raise ValueError("Need at least 2 points for interpolation")

        # Sort by time
        idx = np.argsort(times)
        self.times = np.asarray(times, dtype=np.float64)[idx]
        self.values = self._transform(np.asarray(values, dtype=np.float64)[idx])

    def _transform(self, values: np.ndarray) -> np.ndarray:
        return values

    def _bracket(self, t: float) -> int:
        idx = np.searchsorted(self.times, t, side='right') - 1
        return int(max(0, min(idx, len(self.times) - 2)))

    def _linear(self, t: float, idx: int) -> float:
        t0, t1 = self.times[idx], self.times[idx + 1]
        v0, v1 = self.values[idx], self.values[idx + 1]
        w = (t - t0) / (t1 - t0) if t1 != t0 else 0.0
        return float(v0 + w * (v1 - v0))

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """
        Interpolate at a single point.

        Args:
            t: Year fraction

        Returns:
            Interpolated value
        """

    def __call__(self, t: float) -> float:
        """Convenience method to call interpolate."""
        if self.times is None:
            raise RuntimeError("Interpolator not fitted")
        return self.interpolate(t)


class LinearInterpolator(Interpolator):
    """
    Linear interpolation.

    Extrapolates flat beyond boundaries.
    """

    def interpolate(self, t: float) -> float:
        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])
        return self._linear(t, self._bracket(t))


class LogLinearInterpolator(Interpolator):
    """
    Log-linear interpolation on discount factors.

    fit() takes discount factors; interpolate() returns the log of the
    discount factor. Outside the pillars the first and last forward rates
    are extended.
    """

    def _transform(self, values: np.ndarray) -> np.ndarray:
        if np.any(values <= 0):
            raise ValueError("Discount factors must be positive")
        return np.log(values)

    def interpolate(self, t: float) -> float:
        if t <= self.times[0]:
            return self._linear(t, 0)
        if t >= self.times[-1]:
            return self._linear(t, len(self.times) - 2)
        return self._linear(t, self._bracket(t))


def create_interpolator(method: str) -> Interpolator:
    """
    Factory function to create an interpolator by name.

    Args:
        method: One of "linear_zero", "log_linear"

    Returns:
        Interpolator instance
    """
    method = method.lower().replace("-", "_").replace(" ", "_")

    if method in ("linear", "linear_zero", "lin"):
        return LinearInterpolator()
    elif method in ("log_linear", "loglinear"):
        return LogLinearInterpolator()
    else:
        raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
]
