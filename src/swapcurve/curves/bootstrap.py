"""
Curve bootstrapping engine.

Implements the sequential bootstrap of a zero curve from par swap rates:
1. Sort quotes by maturity (once, at construction)
2. Solve one pillar per quote, reading discount factors off the curve
   built so far
3. Verify repricing of every quote on the finished curve

Each pillar solve is a pure step, `solve_pillar(curve, quote)`; the full
calibration folds it over the sorted quotes starting from a seed curve.

Closed-form pillar solve for a quote (T, S) with accrual tau:
    DF(T) = (1 - sum_i S * tau * DF(i*tau)) / (1 + tau_n * S)
where the sum runs over i*tau < T and tau_n = T - floor(T/tau)*tau.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np
from scipy.optimize import brentq

from ..conventions import BootstrapSettings, Conventions, SolverMethod, DEFAULT_CONVENTIONS
from ..pricers.swaps import SwapPricer
from .curve import Curve, seed_curve
from .instruments import DepositQuote, SwapQuote

logger = logging.getLogger(__name__)


class PillarStatus(Enum):
    """Outcome of a single pillar solve."""
    SOLVED = "SOLVED"
    SKIPPED = "SKIPPED"            # pillar already on the curve
    DEGENERATE = "DEGENERATE"      # non-positive discount factor, rate forced to 0
    NOT_CONVERGED = "NOT_CONVERGED"


@dataclass
class PillarSolution:
    """
    Result of solving one pillar.

    Attributes:
        quote: Quote the pillar was solved from
        zero_rate: Zero rate placed on the curve
        discount_factor: Discount factor solved at the quote maturity
        status: Solve outcome
        iterations: Root-finder iterations (0 for the closed form)
        message: Diagnostic detail for failed solves
    """
    quote: SwapQuote
    zero_rate: float
    discount_factor: float
    status: PillarStatus
    iterations: int = 0
    message: str = ""

    @property
    def maturity(self) -> float:
        return self.quote.maturity

    @property
    def is_valid(self) -> bool:
        """Whether the pillar holds a genuine solution."""
        return self.status in (PillarStatus.SOLVED, PillarStatus.SKIPPED)


@dataclass
class BootstrapResult:
    """Result of curve bootstrap."""
    curve: Curve
    pillars: List[PillarSolution]
    repricing_errors: Dict[SwapQuote, float]
    success: bool
    message: str

    @property
    def max_repricing_error(self) -> float:
        """Largest absolute repricing NPV across quotes."""
        if not self.repricing_errors:
            return 0.0
        return max(abs(e) for e in self.repricing_errors.values())

    def failed_pillars(self) -> List[PillarSolution]:
        """Pillars whose solve was degenerate or did not converge."""
        return [p for p in self.pillars if not p.is_valid]


class SwapCurveBootstrapper:
    """
    Bootstrap a zero curve from par swap quotes.

    The bootstrapper:
    1. Sorts quotes by maturity
    2. Sequentially solves each pillar from discount factors already
       resolvable on the working curve
    3. Verifies that quotes reprice on the finished curve

    The caller seeds the initial curve with any pillar below the first swap
    maturity (typically the deposit pillar at tau, see `seed_curve`).

    Attributes:
        quotes: Quotes sorted ascending by maturity
        conventions: Accrual convention
        settings: Pillar solver settings
    """

    def __init__(
        self,
        quotes: Sequence[SwapQuote],
        conventions: Optional[Conventions] = None,
        settings: Optional[BootstrapSettings] = None
    ):
        self.quotes: Tuple[SwapQuote, ...] = tuple(sorted(quotes, key=lambda q: q.maturity))
        self.conventions = conventions or DEFAULT_CONVENTIONS
        self.settings = settings or BootstrapSettings()
        self._pricer = SwapPricer(self.conventions)

    def calibrate(self, initial_curve: Curve) -> Curve:
        """
        Calibrate a curve from the seed curve.

        The seed curve is not modified. Pillars already present at a quote
        maturity are left as they are.

        Args:
            initial_curve: Seed curve

        Returns:
            New curve with one pillar per quote maturity
        """
        return self.bootstrap(initial_curve, verify=False).curve

    def bootstrap(self, initial_curve: Curve, verify: bool = True) -> BootstrapResult:
        """
        Bootstrap curve from the seed curve, with diagnostics.

        Args:
            initial_curve: Seed curve
            verify: Whether to reprice every quote after bootstrap

        Returns:
            BootstrapResult with curve, per-pillar solutions and repricing NPVs
        """
        curve = initial_curve.copy()
        pillars: List[PillarSolution] = []

        for quote in self.quotes:
            solution = self.solve_pillar(curve, quote)
            pillars.append(solution)

            if solution.status is PillarStatus.SKIPPED:
                logger.debug("Skipping %sY swap: pillar already on curve", quote.maturity)
                continue

            curve.add_node(quote.maturity, solution.zero_rate)
            logger.debug(
                "Calibrated %sY swap. Zero rate: %.6f%% (%s)",
                quote.maturity, solution.zero_rate * 100, solution.status.value
            )

        result = BootstrapResult(
            curve=curve,
            pillars=pillars,
            repricing_errors=self._verify_repricing(curve) if verify else {},
            success=True,
            message="Bootstrap successful"
        )

        failed = result.failed_pillars()
        if failed:
            maturities = ", ".join(f"{p.maturity}Y" for p in failed)
            result.success = False
            result.message = f"Bootstrap failed at {maturities}"

        return result

    def solve_pillar(self, curve: Curve, quote: SwapQuote) -> PillarSolution:
        """
        Solve the pillar for one quote against the current curve.

        Does not modify the curve.
        """
        mat = quote.maturity

        if curve.has_node(mat):
            return PillarSolution(
                quote=quote,
                zero_rate=curve.zero_rate(mat),
                discount_factor=curve.discount_factor(mat),
                status=PillarStatus.SKIPPED
            )

        closed_form = self._solve_closed_form(curve, quote)

        if self.settings.method is SolverMethod.ITERATIVE:
            return self._solve_iterative(curve, quote, closed_form)
        return closed_form

    def _solve_closed_form(self, curve: Curve, quote: SwapQuote) -> PillarSolution:
        """Direct solve of the final discount factor from the zero-NPV condition."""
        mat = quote.maturity
        rate = quote.rate
        tau = self.conventions.accrual_fraction

        discounted_coupons = 0.0
        for t in self.conventions.payment_times(mat):
            discounted_coupons += rate * tau * curve.discount_factor(t)

        tau_n = self.conventions.final_accrual(mat)
        df = (1.0 - discounted_coupons) / (1.0 + tau_n * rate)

        if df > 0:
            return PillarSolution(
                quote=quote,
                zero_rate=float(-np.log(df) / mat),
                discount_factor=df,
                status=PillarStatus.SOLVED
            )

        logger.warning(
            "Non-positive discount factor %.6g at %sY (rate %.4f%%); zero rate set to 0",
            df, mat, rate * 100
        )
        return PillarSolution(
            quote=quote,
            zero_rate=0.0,
            discount_factor=df,
            status=PillarStatus.DEGENERATE,
            message=f"Solved discount factor {df:.6g} is not positive"
        )

    def _solve_iterative(
        self,
        curve: Curve,
        quote: SwapQuote,
        closed_form: PillarSolution
    ) -> PillarSolution:
        """
        Root search on the pillar zero rate.

        The swap NPV is re-evaluated on the curve augmented with the candidate
        pillar, so coupons between the previous pillar and the maturity are
        discounted with the interpolated candidate curve.
        """
        mat = quote.maturity

        def npv_at_rate(r: float) -> float:
            trial = curve.copy()
            trial.add_node(mat, r)
            return self._pricer.price_swap(trial, mat, quote.rate)

        low, high = self.settings.rate_bounds
        try:
            root, info = brentq(
                npv_at_rate, low, high,
                xtol=self.settings.tolerance,
                maxiter=self.settings.max_iterations,
                full_output=True,
                disp=False
            )
        except ValueError as e:
            logger.warning("Root search failed at %sY: %s", mat, e)
            return PillarSolution(
                quote=quote,
                zero_rate=closed_form.zero_rate,
                discount_factor=closed_form.discount_factor,
                status=PillarStatus.NOT_CONVERGED,
                message=f"No root in [{low}, {high}]: {e}"
            )

        if not info.converged:
            logger.warning(
                "Root search did not converge at %sY after %s iterations", mat, info.iterations
            )
            return PillarSolution(
                quote=quote,
                zero_rate=float(root),
                discount_factor=float(np.exp(-root * mat)),
                status=PillarStatus.NOT_CONVERGED,
                iterations=info.iterations,
                message=info.flag
            )

        logger.debug("Root search at %sY converged in %s iterations", mat, info.iterations)
        return PillarSolution(
            quote=quote,
            zero_rate=float(root),
            discount_factor=float(np.exp(-root * mat)),
            status=PillarStatus.SOLVED,
            iterations=info.iterations
        )

    def _verify_repricing(self, curve: Curve) -> Dict[SwapQuote, float]:
        """
        NPV of every quote at its own market rate on the finished curve.

        Returns dict of {quote: npv}. Keyed by quote so that two quotes at the
        same maturity each keep their NPV.
        """
        return {
            q: self._pricer.price_swap(curve, q.maturity, q.rate)
            for q in self.quotes
        }


def parse_quotes(
    quotes: Iterable[Union[SwapQuote, Dict[str, Any]]]
) -> Tuple[Optional[DepositQuote], List[SwapQuote]]:
    """
    Split market quotes into the deposit seed and the swap quotes.

    Args:
        quotes: SwapQuote objects or dicts with keys instrument_type,
            maturity, quote (instrument_type defaults to SWAP)

    Returns:
        (deposit, swaps); deposit is None when no DEPOSIT row is given and
        the last DEPOSIT row wins when there are several

    Raises:
        ValueError: On an instrument type other than DEPOSIT, SWAP or IRS
    """
    deposit: Optional[DepositQuote] = None
    swaps: List[SwapQuote] = []

    for q in quotes:
        if isinstance(q, SwapQuote):
            swaps.append(q)
            continue

        inst_type = str(q.get("instrument_type", "SWAP")).upper()

        if inst_type == "DEPOSIT":
            deposit = DepositQuote(maturity=q["maturity"], rate=q["quote"])
        elif inst_type in ("SWAP", "IRS"):
            swaps.append(SwapQuote(maturity=q["maturity"], rate=q["quote"]))
        else:
            raise ValueError(f"Unknown instrument type: {inst_type}")

    return deposit, swaps


def bootstrap_from_quotes(
    quotes: Iterable[Union[SwapQuote, Dict[str, Any]]],
    deposit_rate: Optional[float] = None,
    deposit_maturity: float = 0.5,
    settings: Optional[BootstrapSettings] = None,
    conventions: Optional[Conventions] = None
) -> Curve:
    """
    Convenience function to bootstrap a curve from quotes.

    Args:
        quotes: SwapQuote objects or dicts with keys instrument_type,
            maturity, quote
        deposit_rate: Deposit rate seeding the short end (overrides any
            DEPOSIT entry in quotes)
        deposit_maturity: Deposit year fraction when deposit_rate is given
        settings: Pillar solver settings
        conventions: Accrual convention

    Returns:
        Bootstrapped curve

    Example quote format:
        {"instrument_type": "DEPOSIT", "maturity": 0.5, "quote": 0.0100}
        {"instrument_type": "SWAP", "maturity": 2.0, "quote": 0.0190}
    """
    deposit, swaps = parse_quotes(quotes)

    if deposit_rate is not None:
        deposit = DepositQuote(maturity=deposit_maturity, rate=deposit_rate)

    if deposit is not None:
        initial = seed_curve(deposit.rate, deposit.maturity)
    else:
        logger.warning("No deposit quote given; bootstrapping from an empty curve")
        initial = Curve()

    bootstrapper = SwapCurveBootstrapper(swaps, conventions=conventions, settings=settings)
    result = bootstrapper.bootstrap(initial)

    if not result.success:
        raise RuntimeError(f"Bootstrap failed: {result.message}")

    return result.curve


__all__ = [
    "SwapCurveBootstrapper",
    "BootstrapResult",
    "PillarSolution",
    "PillarStatus",
    "parse_quotes",
    "bootstrap_from_quotes",
]
