"""
Market quotes used to build the zero curve.

Defines:
- SwapQuote: par rate of a fixed-for-floating swap at a maturity
- DepositQuote: money-market deposit used to anchor the short end

Quotes are immutable. Maturities are year fractions, rates are simple
decimals (0.015 = 1.50%).
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SwapQuote:
    """
    Market par swap rate.

    Attributes:
        maturity: Swap maturity in years (must be positive)
        rate: Par fixed rate (decimal)
    """
    maturity: float
    rate: float

    def __post_init__(self):
        object.__setattr__(self, "maturity", float(self.maturity))
        object.__setattr__(self, "rate", float(self.rate))
        if not self.maturity > 0:
            raise ValueError(f"Quote maturity must be positive: {self.maturity}")


@dataclass(frozen=True)
class DepositQuote:
    """
    Money market deposit.

    Simple interest instrument: the depositor receives (1 + R*tau) at maturity.

    Pricing: DF(T) = 1 / (1 + R * tau)
    """
    maturity: float
    rate: float

    def __post_init__(self):
        object.__setattr__(self, "maturity", float(self.maturity))
        object.__setattr__(self, "rate", float(self.rate))
        if not self.maturity > 0:
            raise ValueError(f"Deposit maturity must be positive: {self.maturity}")

    def implied_discount_factor(self) -> float:
        """Discount factor at maturity implied by the deposit rate."""
        return 1.0 / (1.0 + self.rate * self.maturity)

    def zero_rate(self) -> float:
        """Continuously compounded zero rate, r = -ln(DF) / tau."""
        return float(-np.log(self.implied_discount_factor()) / self.maturity)

    def as_swap_quote(self) -> SwapQuote:
        """Deposit as a swap quote row, for repricing alongside the swaps."""
        return SwapQuote(maturity=self.maturity, rate=self.rate)


__all__ = [
    "SwapQuote",
    "DepositQuote",
]
