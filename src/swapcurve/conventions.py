"""
Accrual conventions and bootstrap solver settings.

The library works on a single fixed-leg convention:
- Accrual fraction: 0.5 (semi-annual), applied to every instrument
- Compounding: continuous, for all zero rates
- One curve for both discounting and projection

Solver methods:
- CLOSED_FORM: direct solve of the final discount factor (default)
- ITERATIVE: root search on the pillar zero rate against the full swap NPV
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple
import math


class SolverMethod(Enum):
    """Pillar solver used by the bootstrapper."""
    CLOSED_FORM = "closed_form"
    ITERATIVE = "iterative"

    @classmethod
    def from_string(cls, s: str) -> "SolverMethod":
        """Parse solver method from string representation."""
        mapping = {
            "CLOSED_FORM": cls.CLOSED_FORM,
            "CLOSEDFORM": cls.CLOSED_FORM,
            "DIRECT": cls.CLOSED_FORM,
            "ITERATIVE": cls.ITERATIVE,
            "BRENT": cls.ITERATIVE,
            "ROOT": cls.ITERATIVE,
        }
        key = s.upper().replace("-", "_").replace(" ", "_")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown solver method: {s}")


@dataclass(frozen=True)
class Conventions:
    """
    Fixed-leg accrual convention.

    Attributes:
        accrual_fraction: Year fraction of one coupon period (0.5 = semi-annual)
        annuity_floor: Annuities below this are treated as degenerate
    """
    accrual_fraction: float = 0.5
    annuity_floor: float = 1e-8

    def __post_init__(self):
        if self.accrual_fraction <= 0:
            raise ValueError(f"Accrual fraction must be positive: {self.accrual_fraction}")

    def payment_times(self, maturity: float) -> List[float]:
        """
        Full-period payment times strictly before maturity.

        Returns tau, 2*tau, ... for every i*tau < maturity.
        """
        tau = self.accrual_fraction
        times = []
        i = 1
        while i * tau < maturity:
            times.append(i * tau)
            i += 1
        return times

    def final_accrual(self, maturity: float) -> float:
        """
        Accrual of the last (possibly partial) period ending at maturity.

        Zero when maturity sits exactly on the accrual grid.
        """
        tau = self.accrual_fraction
        return maturity - math.floor(maturity / tau) * tau

    @classmethod
    def semi_annual(cls) -> "Conventions":
        """Standard semi-annual fixed leg."""
        return cls(accrual_fraction=0.5)


@dataclass(frozen=True)
class BootstrapSettings:
    """
    Settings for the pillar solver.

    Attributes:
        method: Closed-form or iterative pillar solve
        tolerance: Absolute tolerance on the zero rate (iterative only)
        max_iterations: Iteration cap for the root search
        rate_bounds: Zero-rate bracket searched by the root finder
    """
    method: SolverMethod = SolverMethod.CLOSED_FORM
    tolerance: float = 1e-12
    max_iterations: int = 100
    rate_bounds: Tuple[float, float] = (-0.5, 1.0)


DEFAULT_CONVENTIONS = Conventions.semi_annual()


__all__ = [
    "SolverMethod",
    "Conventions",
    "BootstrapSettings",
    "DEFAULT_CONVENTIONS",
]
