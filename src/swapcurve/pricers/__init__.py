"""
Pricers package - swap pricing off a bootstrapped curve.

Provides:
- SwapPricer: annuity, par rate and NPV of vanilla swaps
"""

from .swaps import SwapPricer, SwapValuation, price_swap, compute_swap_par_rate

__all__ = [
    "SwapPricer",
    "SwapValuation",
    "price_swap",
    "compute_swap_par_rate",
]
