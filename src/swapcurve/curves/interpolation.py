"""
Interpolation methods for zero curves.

Provides:
- LinearInterpolator: linear interpolation on zero rates with flat
  extrapolation beyond the first and last pillars

Interpolators take year fractions as x-coordinates and continuously
compounded zero rates as y-coordinates.
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class Interpolator(ABC):
    """Abstract base class for curve interpolation."""

    @abstractmethod
    def fit(self, times: np.ndarray, values: np.ndarray) -> None:
        """
        Fit the interpolator to data points.

        Args:
            times: Array of year fractions (must be sorted ascending)
            values: Array of zero rates
        """
        pass

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """
        Interpolate at a single point.

        Args:
            t: Year fraction

        Returns:
            Interpolated value
        """
        pass

    def __call__(self, t: float) -> float:
        """Convenience method to call interpolate."""
        return self.interpolate(t)


class LinearInterpolator(Interpolator):
    """
    Linear interpolation on zero rates.

    Between bracketing pillars (t1, r1) and (t2, r2):
        r(t) = r1 + (r2 - r1) / (t2 - t1) * (t - t1)

    Extrapolates flat beyond boundaries. A single pillar gives a flat curve.
    """

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.values: Optional[np.ndarray] = None

    def fit(self, times: np.ndarray, values: np.ndarray) -> None:
        """Fit linear interpolator."""
        if len(times) != len(values):
            raise ValueError("Times and values must have same length")
        if len(times) < 1:
            raise ValueError("Need at least 1 point for interpolation")

        self.times = np.asarray(times, dtype=np.float64)
        self.values = np.asarray(values, dtype=np.float64)
        if np.any(np.diff(self.times) <= 0):
            raise ValueError("Times must be strictly increasing")

    def _bracket(self, t: float) -> int:
        """Index of the first pillar at or after t."""
        return int(np.searchsorted(self.times, t, side='left'))

    def interpolate(self, t: float) -> float:
        """Linear interpolation with flat extrapolation."""
        if self.times is None:
            raise RuntimeError("Interpolator not fitted")

        if t <= self.times[0]:
            return float(self.values[0])
        if t >= self.times[-1]:
            return float(self.values[-1])

        idx = self._bracket(t)
        if self.times[idx] == t:
            return float(self.values[idx])

        t1, t2 = float(self.times[idx - 1]), float(self.times[idx])
        r1, r2 = float(self.values[idx - 1]), float(self.values[idx])

        return r1 + (r2 - r1) / (t2 - t1) * (t - t1)


def create_interpolator(method: str) -> Interpolator:
    """
    Factory function to create an interpolator by name.

    Args:
        method: "linear" (zero-rate linear is the only supported scheme)

    Returns:
        Interpolator instance
    """
    method = method.lower().replace("-", "_").replace(" ", "_")

    if method in ("linear", "lin", "linear_zero"):
        return LinearInterpolator()
    raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "create_interpolator",
]
