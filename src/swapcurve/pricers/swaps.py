"""
Interest rate swap pricing engine.

Prices vanilla fixed-float swaps off a single zero curve (the same curve
discounts cashflows and projects the floating leg).

Conventions:
- Fixed leg: accrual fraction tau (0.5, semi-annual) on every full period,
  plus a final period of tau_n = T - floor(T/tau)*tau ending at maturity
- Floating leg: valued at par, PV_float = 1 - DF(T)

Pricing formulas:
    Annuity   A = sum(tau * DF(t_i)) + tau_n * DF(T)
    Par rate  R = (1 - DF(T)) / A
    NPV       = (1 - DF(T)) - K * A     (pay fixed, receive floating)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional

import pandas as pd

from ..conventions import Conventions, DEFAULT_CONVENTIONS
from ..curves.instruments import SwapQuote

if TYPE_CHECKING:
    from ..curves.curve import Curve


@dataclass
class SwapValuation:
    """
    Valuation of a swap at a fixed rate.

    Attributes:
        maturity: Swap maturity in years
        fixed_rate: Fixed rate priced (decimal)
        annuity: PV of one unit of fixed coupon per year
        fair_rate: Par rate implied by the curve
        npv: Net PV to the fixed payer
        degenerate: Annuity fell below the floor, fair rate forced to 0
    """
    maturity: float
    fixed_rate: float
    annuity: float
    fair_rate: float
    npv: float
    degenerate: bool = False


class SwapPricer:
    """
    Swap pricing engine.

    Stateless apart from the accrual convention: every call takes the curve
    explicitly and only reads from it.

    Attributes:
        conventions: Fixed-leg accrual convention
    """

    def __init__(self, conventions: Optional[Conventions] = None):
        self.conventions = conventions or DEFAULT_CONVENTIONS

    def annuity(self, curve: "Curve", maturity: float) -> float:
        """
        PV of one unit of fixed coupon per year up to maturity.

        Args:
            curve: Discount curve
            maturity: Swap maturity in years

        Returns:
            Annuity including the final (possibly partial) period
        """
        tau = self.conventions.accrual_fraction

        total = 0.0
        for t in self.conventions.payment_times(maturity):
            total += tau * curve.discount_factor(t)

        last_tau = self.conventions.final_accrual(maturity)
        total += last_tau * curve.discount_factor(maturity)
        return total

    def fair_rate(self, curve: "Curve", maturity: float) -> float:
        """
        Par swap rate R = (1 - DF(T)) / A.

        Returns 0.0 when the annuity is below the floor.
        """
        annuity = self.annuity(curve, maturity)
        if annuity < self.conventions.annuity_floor:
            return 0.0
        return (1.0 - curve.discount_factor(maturity)) / annuity

    def price_swap(self, curve: "Curve", maturity: float, fixed_rate: float) -> float:
        """
        NPV of a pay-fixed / receive-floating swap.

        Approximately zero when fixed_rate is the market rate a pillar was
        calibrated from.
        """
        pv_fixed = fixed_rate * self.annuity(curve, maturity)
        pv_float = 1.0 - curve.discount_factor(maturity)
        return pv_float - pv_fixed

    def value_swap(self, curve: "Curve", maturity: float, fixed_rate: float) -> SwapValuation:
        """Full valuation, flagging a degenerate annuity instead of hiding it."""
        annuity = self.annuity(curve, maturity)
        pv_float = 1.0 - curve.discount_factor(maturity)
        degenerate = annuity < self.conventions.annuity_floor

        return SwapValuation(
            maturity=maturity,
            fixed_rate=fixed_rate,
            annuity=annuity,
            fair_rate=0.0 if degenerate else pv_float / annuity,
            npv=pv_float - fixed_rate * annuity,
            degenerate=degenerate
        )

    def verify_quotes(self, curve: "Curve", quotes: Iterable[SwapQuote]) -> pd.DataFrame:
        """
        Reprice market quotes on the curve.

        Returns:
            DataFrame with columns maturity, market_rate, fair_rate, npv
        """
        rows = []
        for q in quotes:
            valuation = self.value_swap(curve, q.maturity, q.rate)
            rows.append({
                "maturity": q.maturity,
                "market_rate": q.rate,
                "fair_rate": valuation.fair_rate,
                "npv": valuation.npv,
            })
        return pd.DataFrame(rows, columns=["maturity", "market_rate", "fair_rate", "npv"])

    def interpolate_quotes(self, curve: "Curve", maturities: Iterable[float]) -> List[SwapQuote]:
        """Fair swap quotes at maturities that were not quoted."""
        return [SwapQuote(maturity=m, rate=self.fair_rate(curve, m)) for m in maturities]


def price_swap(curve: "Curve", maturity: float, fixed_rate: float) -> float:
    """
    Price a vanilla swap with the default semi-annual convention.

    Args:
        curve: Discount/projection curve
        maturity: Swap maturity in years
        fixed_rate: Fixed rate (decimal)

    Returns:
        Swap NPV to the fixed payer
    """
    return SwapPricer().price_swap(curve, maturity, fixed_rate)


def compute_swap_par_rate(curve: "Curve", maturity: float) -> float:
    """Par swap rate with the default semi-annual convention."""
    return SwapPricer().fair_rate(curve, maturity)


__all__ = [
    "SwapPricer",
    "SwapValuation",
    "price_swap",
    "compute_swap_par_rate",
]
