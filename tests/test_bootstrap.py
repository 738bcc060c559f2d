"""
Unit tests for swap curve bootstrapping.
"""

import logging
import numpy as np
import pytest

from swapcurve.conventions import BootstrapSettings, SolverMethod
from swapcurve.curves import (
    Curve,
    DepositQuote,
    PillarStatus,
    SwapCurveBootstrapper,
    SwapQuote,
    bootstrap_from_quotes,
    parse_quotes,
    seed_curve,
)
from swapcurve.market_data import SAMPLE_MARKET_QUOTES
from swapcurve.pricers import SwapPricer


EXPECTED_PILLARS = {
    1.0: 0.00749067,
    2.0: 0.01434158,
    3.0: 0.02023314,
    5.0: 0.02914099,
    6.0: 0.03833820,
}


@pytest.fixture
def quotes():
    """Market swap quotes, deliberately out of maturity order."""
    return [
        SwapQuote(5.0, 0.0315),
        SwapQuote(1.0, 0.0150),
        SwapQuote(6.0, 0.0400),
        SwapQuote(3.0, 0.0240),
        SwapQuote(2.0, 0.0190),
    ]


@pytest.fixture
def seed():
    """6M deposit at 1.00%."""
    return seed_curve(0.01, 0.5)


@pytest.fixture
def pricer():
    return SwapPricer()


class TestClosedFormBootstrap:
    """Tests for the default closed-form calibration."""

    def test_quotes_sorted_once(self, quotes):
        bootstrapper = SwapCurveBootstrapper(quotes)
        maturities = [q.maturity for q in bootstrapper.quotes]
        assert maturities == [1.0, 2.0, 3.0, 5.0, 6.0]

    def test_sample_scenario_pillars(self, quotes, seed):
        """Calibrated zero rates match the reference scenario."""
        curve = SwapCurveBootstrapper(quotes).calibrate(seed)

        for mat, expected in EXPECTED_PILLARS.items():
            assert abs(curve.zero_rate(mat) - expected) < 1e-7, f"{mat}Y pillar"

    def test_pillar_set(self, quotes, seed):
        """Seed pillar plus one pillar per quote maturity."""
        curve = SwapCurveBootstrapper(quotes).calibrate(seed)
        assert curve.get_node_times().tolist() == [0.5, 1.0, 2.0, 3.0, 5.0, 6.0]
        assert curve.zero_rate(0.5) == seed.zero_rate(0.5)

    def test_seed_curve_not_mutated(self, quotes, seed):
        SwapCurveBootstrapper(quotes).calibrate(seed)
        assert len(seed) == 1

    def test_idempotent(self, quotes, seed):
        """Same quotes and seed give the same curve; recalibrating is a no-op."""
        bootstrapper = SwapCurveBootstrapper(quotes)
        first = bootstrapper.calibrate(seed)
        second = bootstrapper.calibrate(seed)

        assert first.get_nodes() == second.get_nodes()
        assert bootstrapper.calibrate(first).get_nodes() == first.get_nodes()

    def test_first_swap_reprices(self, quotes, seed, pricer):
        """The first swap only discounts off the seed pillar and reprices exactly."""
        curve = SwapCurveBootstrapper(quotes).calibrate(seed)
        assert abs(pricer.price_swap(curve, 1.0, 0.0150)) < 1e-12

    def test_closed_form_residuals_bounded(self, quotes, seed, pricer):
        """
        Later maturities discount intermediate coupons off the extrapolated
        curve during the solve, leaving small residual NPVs once the next
        pillar is in place.
        """
        curve = SwapCurveBootstrapper(quotes).calibrate(seed)
        npvs = {q.maturity: pricer.price_swap(curve, q.maturity, q.rate) for q in quotes}

        assert max(abs(v) for v in npvs.values()) < 8e-4
        assert abs(npvs[2.0]) > 1e-5

    def test_solve_pillar_is_pure(self, quotes, seed):
        bootstrapper = SwapCurveBootstrapper(quotes)
        solution = bootstrapper.solve_pillar(seed, SwapQuote(1.0, 0.0150))

        assert solution.status is PillarStatus.SOLVED
        assert len(seed) == 1

        expected_df = 1.0 - 0.0150 * 0.5 * seed.discount_factor(0.5)
        assert abs(solution.discount_factor - expected_df) < 1e-15
        assert abs(solution.zero_rate + np.log(expected_df)) < 1e-15

    def test_off_grid_maturity(self, seed):
        """The last partial period accrues tau_n = T - floor(2T)/2."""
        quote = SwapQuote(1.25, 0.0150)
        solution = SwapCurveBootstrapper([quote]).solve_pillar(seed, quote)

        known = 0.0150 * 0.5 * (seed.discount_factor(0.5) + seed.discount_factor(1.0))
        expected_df = (1.0 - known) / (1.0 + 0.25 * 0.0150)
        assert abs(solution.discount_factor - expected_df) < 1e-15
        assert abs(solution.zero_rate - (-np.log(expected_df) / 1.25)) < 1e-15

    def test_existing_pillar_skipped(self, quotes, seed):
        """A pillar already at a quote maturity is left untouched."""
        seed.add_node(2.0, 0.05)
        result = SwapCurveBootstrapper(quotes).bootstrap(seed)

        assert result.curve.zero_rate(2.0) == 0.05
        statuses = {p.maturity: p.status for p in result.pillars}
        assert statuses[2.0] is PillarStatus.SKIPPED
        assert statuses[1.0] is PillarStatus.SOLVED
        assert result.success

    def test_degenerate_pillar_reported(self, seed):
        """A non-positive discount factor forces a zero rate and fails the result."""
        quotes = [SwapQuote(1.0, 0.0150), SwapQuote(5.0, 0.50)]
        bootstrapper = SwapCurveBootstrapper(quotes)
        result = bootstrapper.bootstrap(seed)

        bad = result.failed_pillars()
        assert [p.maturity for p in bad] == [5.0]
        assert bad[0].status is PillarStatus.DEGENERATE
        assert bad[0].discount_factor <= 0
        assert result.curve.zero_rate(5.0) == 0.0
        assert not result.success
        assert "5.0Y" in result.message

        # calibrate keeps the sentinel pillar without raising
        assert bootstrapper.calibrate(seed).zero_rate(5.0) == 0.0

    def test_repricing_errors(self, quotes, seed, pricer):
        result = SwapCurveBootstrapper(quotes).bootstrap(seed)

        assert sorted(q.maturity for q in result.repricing_errors) == [1.0, 2.0, 3.0, 5.0, 6.0]
        assert abs(result.max_repricing_error - max(
            abs(pricer.price_swap(result.curve, q.maturity, q.rate)) for q in quotes
        )) < 1e-15
        assert result.success
        assert result.message == "Bootstrap successful"

    def test_duplicate_maturity_repricing(self, seed):
        """Each quote keeps its own NPV when two share a maturity."""
        solved, duplicate = SwapQuote(1.0, 0.0150), SwapQuote(1.0, 0.0200)
        result = SwapCurveBootstrapper([solved, duplicate]).bootstrap(seed)

        assert [p.status for p in result.pillars] == [PillarStatus.SOLVED, PillarStatus.SKIPPED]
        assert len(result.repricing_errors) == 2
        assert abs(result.repricing_errors[solved]) < 1e-12
        assert result.repricing_errors[duplicate] < -1e-3
        assert result.max_repricing_error == abs(result.repricing_errors[duplicate])

    def test_no_verification(self, quotes, seed):
        result = SwapCurveBootstrapper(quotes).bootstrap(seed, verify=False)
        assert result.repricing_errors == {}
        assert result.max_repricing_error == 0.0

    def test_logs_each_pillar(self, quotes, seed, caplog):
        with caplog.at_level(logging.DEBUG, logger="swapcurve.curves.bootstrap"):
            SwapCurveBootstrapper(quotes).calibrate(seed)
        assert "Calibrated 1.0Y swap" in caplog.text
        assert "Calibrated 6.0Y swap" in caplog.text


class TestIterativeBootstrap:
    """Tests for the root-search pillar solve."""

    @pytest.fixture
    def settings(self):
        return BootstrapSettings(method=SolverMethod.ITERATIVE)

    def test_round_trip(self, quotes, seed, pricer, settings):
        """Every quote reprices to zero NPV on the finished curve."""
        result = SwapCurveBootstrapper(quotes, settings=settings).bootstrap(seed)

        assert result.success
        for q in quotes:
            assert abs(pricer.price_swap(result.curve, q.maturity, q.rate)) < 1e-6
        assert all(p.iterations > 0 for p in result.pillars)

    def test_matches_closed_form_on_first_swap(self, quotes, seed, settings):
        closed = SwapCurveBootstrapper(quotes).calibrate(seed)
        iterative = SwapCurveBootstrapper(quotes, settings=settings).calibrate(seed)

        assert abs(iterative.zero_rate(1.0) - closed.zero_rate(1.0)) < 1e-10
        assert abs(iterative.zero_rate(2.0) - closed.zero_rate(2.0)) > 1e-6

    def test_idempotent(self, quotes, seed, settings):
        bootstrapper = SwapCurveBootstrapper(quotes, settings=settings)
        assert bootstrapper.calibrate(seed) == bootstrapper.calibrate(seed)

    def test_no_bracket_reported(self, seed):
        """A bracket without a sign change is reported, not raised."""
        settings = BootstrapSettings(method=SolverMethod.ITERATIVE, rate_bounds=(0.5, 1.0))
        quote = SwapQuote(1.0, 0.0150)
        result = SwapCurveBootstrapper([quote], settings=settings).bootstrap(seed)

        pillar = result.pillars[0]
        assert pillar.status is PillarStatus.NOT_CONVERGED
        assert "No root" in pillar.message
        assert not result.success

        # the closed-form estimate stays on the curve
        closed = SwapCurveBootstrapper([quote]).calibrate(seed)
        assert result.curve.zero_rate(1.0) == closed.zero_rate(1.0)


class TestBootstrapFromQuotes:
    """Tests for the convenience builder."""

    def test_sample_quotes(self, quotes, seed):
        curve = bootstrap_from_quotes(SAMPLE_MARKET_QUOTES)
        expected = SwapCurveBootstrapper(quotes).calibrate(seed)
        assert curve == expected

    def test_deposit_rate_argument(self, quotes, seed):
        curve = bootstrap_from_quotes(quotes, deposit_rate=0.01)
        assert curve == SwapCurveBootstrapper(quotes).calibrate(seed)

    def test_unknown_instrument(self):
        with pytest.raises(ValueError):
            bootstrap_from_quotes([{"instrument_type": "FRA", "maturity": 1.0, "quote": 0.01}])

    def test_failed_bootstrap_raises(self):
        with pytest.raises(RuntimeError):
            bootstrap_from_quotes([SwapQuote(5.0, 0.50)], deposit_rate=0.01)

    def test_without_deposit(self, quotes, caplog):
        with caplog.at_level(logging.WARNING, logger="swapcurve.curves.bootstrap"):
            curve = bootstrap_from_quotes(quotes)

        assert 0.5 not in curve
        assert len(curve) == 5
        assert "No deposit quote" in caplog.text


class TestParseQuotes:
    """Tests for splitting market quotes into deposit and swaps."""

    def test_sample_quotes(self, quotes):
        deposit, swaps = parse_quotes(SAMPLE_MARKET_QUOTES)

        assert deposit == DepositQuote(0.5, 0.01)
        assert sorted(swaps, key=lambda q: q.maturity) == sorted(quotes, key=lambda q: q.maturity)

    def test_defaults_to_swap(self):
        deposit, swaps = parse_quotes([{"maturity": 2, "quote": 0.019}, SwapQuote(1.0, 0.015)])

        assert deposit is None
        assert swaps == [SwapQuote(2.0, 0.019), SwapQuote(1.0, 0.015)]

    def test_irs_alias(self):
        _, swaps = parse_quotes([{"instrument_type": "irs", "maturity": 3.0, "quote": 0.024}])
        assert swaps == [SwapQuote(3.0, 0.024)]

    @pytest.mark.parametrize("inst_type", ["FRA", "FUTURE", "BOND"])
    def test_unknown_instrument_rejected(self, inst_type):
        """Unknown rows are never treated as swaps."""
        with pytest.raises(ValueError, match="Unknown instrument type"):
            parse_quotes([
                {"instrument_type": "SWAP", "maturity": 1.0, "quote": 0.015},
                {"instrument_type": inst_type, "maturity": 2.0, "quote": 0.019},
            ])
