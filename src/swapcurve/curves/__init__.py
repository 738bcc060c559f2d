"""
Curves package - zero curve construction.

Provides:
- Curve: pillar store with zero-rate interpolation and discount factors
- SwapCurveBootstrapper: bootstrap a curve from par swap quotes
- SwapQuote / DepositQuote: market inputs
"""

from .instruments import SwapQuote, DepositQuote
from .interpolation import Interpolator, LinearInterpolator, create_interpolator
from .curve import Curve, seed_curve
from .bootstrap import (
    SwapCurveBootstrapper,
    BootstrapResult,
    PillarSolution,
    PillarStatus,
    parse_quotes,
    bootstrap_from_quotes,
)

__all__ = [
    "Curve",
    "seed_curve",
    "SwapCurveBootstrapper",
    "BootstrapResult",
    "PillarSolution",
    "PillarStatus",
    "parse_quotes",
    "bootstrap_from_quotes",
    "Interpolator",
    "LinearInterpolator",
    "create_interpolator",
    "SwapQuote",
    "DepositQuote",
]
