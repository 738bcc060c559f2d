"""
Zero curve representation and operations.

The Curve class provides:
- Zero rate z(t), linearly interpolated on zero rates
- Discount factor P(0,t) = exp(-z(t) * t)
- Read access to the sorted pillar set

Pillars are kept as two parallel lists sorted by time. Lookups and
insertions locate their slot by binary search, and iteration is always
in increasing time order.
"""

from bisect import bisect_left
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .instruments import DepositQuote
from .interpolation import Interpolator, create_interpolator


class Curve:
    """
    Zero curve built from (time, zero rate) pillars.

    Attributes:
        interpolation_method: Name of interpolation method

    Conventions:
        - Zero rates are continuously compounded
        - Times are year fractions
        - An empty curve reports a zero rate of 0.0 everywhere
        - Rates are flat beyond the first and last pillars
    """

    def __init__(self, interpolation_method: str = "linear"):
        self.interpolation_method = interpolation_method

        self._times: List[float] = []
        self._rates: List[float] = []
        self._interpolator: Optional[Interpolator] = None
        self._is_fitted = False

    def add_node(self, time: float, rate: float) -> None:
        """
        Insert a pillar, overwriting any pillar already at time.

        Args:
            time: Year fraction
            rate: Continuously compounded zero rate
        """
        time = float(time)
        idx = bisect_left(self._times, time)

        if idx < len(self._times) and self._times[idx] == time:
            self._rates[idx] = float(rate)
        else:
            self._times.insert(idx, time)
            self._rates.insert(idx, float(rate))

        self._is_fitted = False

    def build(self) -> None:
        """Fit the interpolator to the current pillars."""
        if not self._times:
            raise ValueError("Need at least 1 node to build curve")

        self._interpolator = create_interpolator(self.interpolation_method)
        self._interpolator.fit(np.array(self._times), np.array(self._rates))
        self._is_fitted = True

    def _ensure_fitted(self) -> None:
        if not self._is_fitted or self._interpolator is None:
            self.build()

    def zero_rate(self, t: float) -> float:
        """
        Get zero rate z(t).

        Args:
            t: Year fraction

        Returns:
            Continuously compounded zero rate, 0.0 for an empty curve
        """
        if not self._times:
            return 0.0

        self._ensure_fitted()
        return self._interpolator.interpolate(t)

    def discount_factor(self, t: float) -> float:
        """Get discount factor P(0,t) = exp(-z(t) * t)."""
        return float(np.exp(-self.zero_rate(t) * t))

    def get_max_maturity(self) -> float:
        """Latest pillar time, 0.0 for an empty curve."""
        return self._times[-1] if self._times else 0.0

    def has_node(self, time: float) -> bool:
        """Whether a pillar sits exactly at time."""
        idx = bisect_left(self._times, time)
        return idx < len(self._times) and self._times[idx] == time

    def get_nodes(self) -> List[Tuple[float, float]]:
        """
        Get all pillars.

        Returns:
            List of (time, zero_rate) tuples in increasing time order
        """
        return list(zip(self._times, self._rates))

    def get_node_times(self) -> np.ndarray:
        """Get array of pillar times."""
        return np.array(self._times)

    def copy(self) -> "Curve":
        """Create an independent copy of the curve."""
        new_curve = Curve(interpolation_method=self.interpolation_method)
        new_curve._times = list(self._times)
        new_curve._rates = list(self._rates)
        return new_curve

    def __contains__(self, time: float) -> bool:
        return self.has_node(time)

    def __len__(self) -> int:
        return len(self._times)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(self.get_nodes())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Curve):
            return NotImplemented
        return self._times == other._times and self._rates == other._rates

    def __repr__(self) -> str:
        return (f"Curve(nodes={len(self._times)}, max_maturity={self.get_max_maturity()}, "
                f"method={self.interpolation_method})")


def seed_curve(deposit_rate: float, accrual: float = 0.5) -> Curve:
    """
    Create the anchor curve from a money-market deposit.

    DF(tau) = 1 / (1 + d * tau), r = -ln(DF) / tau, inserted at tau.

    Args:
        deposit_rate: Simple deposit rate (decimal)
        accrual: Deposit year fraction

    Returns:
        Curve with a single pillar at accrual
    """
    deposit = DepositQuote(maturity=accrual, rate=deposit_rate)

    curve = Curve()
    curve.add_node(deposit.maturity, deposit.zero_rate())
    return curve


__all__ = [
    "Curve",
    "seed_curve",
]
