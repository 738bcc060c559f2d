"""
SwapCurve: zero curve bootstrapping from par swap rates

A small library for:
- Bootstrapping a continuously compounded zero curve from a deposit seed
  and par swap quotes (semi-annual fixed leg, single curve)
- Pricing vanilla swaps off the curve (annuity, par rate, NPV)
- Verifying the calibration and quoting unquoted maturities
- Console reports and CSV export of quotes and pillars
"""

__version__ = "0.1.0"

# Conventions
from .conventions import Conventions, BootstrapSettings, SolverMethod

# Curves
from .curves import (
    Curve,
    seed_curve,
    SwapQuote,
    DepositQuote,
    SwapCurveBootstrapper,
    BootstrapResult,
    PillarSolution,
    PillarStatus,
    parse_quotes,
    bootstrap_from_quotes,
)

# Pricers
from .pricers import SwapPricer, SwapValuation, price_swap, compute_swap_par_rate

# Market data
from .market_data import SAMPLE_MARKET_QUOTES, load_market_quotes, load_swap_quotes

# Reporting
from .reporting import CurveReport, ReportFormatter, export_quotes, export_curve

__all__ = [
    # Version
    "__version__",
    # Conventions
    "Conventions",
    "BootstrapSettings",
    "SolverMethod",
    # Curves
    "Curve",
    "seed_curve",
    "SwapQuote",
    "DepositQuote",
    "SwapCurveBootstrapper",
    "BootstrapResult",
    "PillarSolution",
    "PillarStatus",
    "parse_quotes",
    "bootstrap_from_quotes",
    # Pricers
    "SwapPricer",
    "SwapValuation",
    "price_swap",
    "compute_swap_par_rate",
    # Market data
    "SAMPLE_MARKET_QUOTES",
    "load_market_quotes",
    "load_swap_quotes",
    # Reporting
    "CurveReport",
    "ReportFormatter",
    "export_quotes",
    "export_curve",
]
