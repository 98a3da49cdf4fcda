"""
Unit tests for simulation.py and portfolio.py modules.

Tests SimulationParameters validation, single-trajectory compounding and
per-portfolio tasks.
"""

import threading

import numpy as np
import pytest

from portsim.exceptions import (
    ConfigurationError,
    SimulationCancelledError,
    ValidationError,
)
from portsim.portfolio import Portfolio, default_portfolios
from portsim.returns import RandomReturnSource
from portsim.simulation import (
    PortfolioSimulationTask,
    SimulationParameters,
    TrajectorySimulator,
)
from portsim.statistics import Result


def compound_fixed_rate(params: SimulationParameters, rate: float) -> float:
    """Reference compounding of a constant nominal rate, year by year."""
    amount = params.starting_amount
    for _ in range(params.horizon_years):
        real = (1 + rate / 100) / (1 + params.inflation_rate_percent / 100) - 1
        amount = amount * (1 + real)
    return amount


# ============================================================================
# PORTFOLIO
# ============================================================================

class TestPortfolio:
    """Test Portfolio value type."""

    def test_fields(self, aggressive):
        assert aggressive.name == "Aggressive"
        assert aggressive.mean_return == 9.4324
        assert aggressive.risk == 15.675

    def test_immutable(self, aggressive):
        with pytest.raises(Exception):
            aggressive.risk = 1.0

    def test_negative_risk_accepted(self):
        assert Portfolio("Mirrored", 5.0, -1.0).risk == -1.0

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Portfolio("", 5.0, 1.0)

    def test_any_real_mean_accepted(self):
        assert Portfolio("Unbounded", float("inf"), 1.0).mean_return == float("inf")
        assert Portfolio("Shrinking", -40.0, 1.0).mean_return == -40.0

    def test_default_portfolios(self):
        defaults = default_portfolios()
        assert [p.name for p in defaults] == ["Aggressive", "Very Conservative"]
        assert defaults[1] == Portfolio("Very Conservative", 6.189, 6.3438)


# ============================================================================
# PARAMETERS
# ============================================================================

class TestSimulationParameters:
    """Test SimulationParameters defaults and validation."""

    def test_defaults(self):
        params = SimulationParameters()
        assert params.starting_amount == 100_000
        assert params.horizon_years == 20
        assert params.inflation_rate_percent == 3.5
        assert params.iterations_per_portfolio == 10_000

    def test_zero_iterations_rejected(self):
        with pytest.raises(ConfigurationError, match="iterations_per_portfolio"):
            SimulationParameters(iterations_per_portfolio=0)

    def test_negative_horizon_rejected(self):
        with pytest.raises(ConfigurationError, match="horizon_years"):
            SimulationParameters(horizon_years=-1)

    def test_degenerate_inflation_rejected(self):
        with pytest.raises(ConfigurationError):
            SimulationParameters(inflation_rate_percent=-100)

    def test_zero_horizon_allowed(self):
        assert SimulationParameters(horizon_years=0).horizon_years == 0

    def test_immutable(self):
        params = SimulationParameters()
        with pytest.raises(Exception):
            params.horizon_years = 5


# ============================================================================
# TRAJECTORY SIMULATOR
# ============================================================================

class TestTrajectorySimulator:
    """Test single-trajectory compounding."""

    def test_zero_horizon_returns_starting_amount(self, source, aggressive):
        params = SimulationParameters(starting_amount=123_456.78, horizon_years=0)
        sim = TrajectorySimulator(source)
        for _ in range(10):
            assert sim.simulate_once(aggressive, params) == 123_456.78

    def test_zero_risk_is_deterministic(self, source, riskless, small_params):
        sim = TrajectorySimulator(source)
        outcomes = {sim.simulate_once(riskless, small_params) for _ in range(50)}
        assert len(outcomes) == 1

    def test_zero_risk_matches_fixed_rate_compounding(self, source, riskless, small_params):
        sim = TrajectorySimulator(source)
        expected = compound_fixed_rate(small_params, riskless.mean_return)
        assert sim.simulate_once(riskless, small_params) == expected

    @pytest.mark.parametrize("mean", [-5.0, 0.0, 3.5, 6.189, 9.4324, 25.0])
    @pytest.mark.parametrize("years", [1, 5, 10, 20, 40])
    def test_fixed_rate_compounding_is_exact(self, source, mean, years):
        params = SimulationParameters(starting_amount=100_000, horizon_years=years, inflation_rate_percent=3.5)
        fixed = Portfolio("Fixed", mean, 0.0)
        assert TrajectorySimulator(source).simulate_once(fixed, params) == compound_fixed_rate(params, mean)

    def test_return_equal_to_inflation_preserves_value(self, source):
        params = SimulationParameters(starting_amount=1000, horizon_years=30, inflation_rate_percent=3.5)
        flat = Portfolio("Flat", 3.5, 0.0)
        assert TrajectorySimulator(source).simulate_once(flat, params) == pytest.approx(1000.0)

    def test_one_year_formula(self):
        """One year: amount * (1 + ((1 + r/100) / (1 + i/100) - 1))."""

        class FixedSource(RandomReturnSource):
            def annual_returns(self, mean_return, risk, size):
                return np.full(size, 12.0)

        params = SimulationParameters(starting_amount=100_000, horizon_years=1, inflation_rate_percent=3.5)
        value = TrajectorySimulator(FixedSource()).simulate_once(Portfolio("P", 0.0, 1.0), params)
        assert value == pytest.approx(100_000 * (1.12 / 1.035))

    def test_negative_amounts_not_clamped(self):
        """A year below -100% flips the sign of the balance."""

        class CrashSource(RandomReturnSource):
            def annual_returns(self, mean_return, risk, size):
                return np.full(size, -150.0)

        params = SimulationParameters(starting_amount=100, horizon_years=1, inflation_rate_percent=0.0)
        value = TrajectorySimulator(CrashSource()).simulate_once(Portfolio("P", 0.0, 1.0), params)
        assert value == pytest.approx(-50.0)

    def test_default_source_created(self, aggressive, small_params):
        sim = TrajectorySimulator()
        assert isinstance(sim.source, RandomReturnSource)
        assert np.isfinite(sim.simulate_once(aggressive, small_params))


# ============================================================================
# PORTFOLIO SIMULATION TASK
# ============================================================================

class TestPortfolioSimulationTask:
    """Test per-portfolio task execution."""

    def test_run_returns_named_result(self, aggressive, small_params, source):
        result = PortfolioSimulationTask(aggressive, small_params, source).run()
        assert isinstance(result, Result)
        assert result.name == "Aggressive"

    def test_percentile_ordering(self, portfolios, small_params, seed):
        for k in range(5):
            for portfolio in portfolios:
                task = PortfolioSimulationTask(portfolio, small_params, RandomReturnSource(seed + k))
                result = task.run()
                assert result.worst_case <= result.median <= result.best_case

    def test_riskless_collapses_percentiles(self, riskless, small_params, source):
        result = PortfolioSimulationTask(riskless, small_params, source).run()
        expected = compound_fixed_rate(small_params, riskless.mean_return)
        assert result.median == expected
        assert result.best_case == result.median == result.worst_case

    def test_single_iteration(self, aggressive, source):
        params = SimulationParameters(iterations_per_portfolio=1)
        result = PortfolioSimulationTask(aggressive, params, source).run()
        assert result.best_case == result.median == result.worst_case

    def test_seeded_task_reproducible(self, aggressive, small_params, seed):
        a = PortfolioSimulationTask(aggressive, small_params, RandomReturnSource(seed)).run()
        b = PortfolioSimulationTask(aggressive, small_params, RandomReturnSource(seed)).run()
        assert a == b

    def test_aggressive_spread_wider(self, aggressive, very_conservative, small_params, seed):
        agg = PortfolioSimulationTask(aggressive, small_params, RandomReturnSource(seed)).run()
        con = PortfolioSimulationTask(very_conservative, small_params, RandomReturnSource(seed)).run()
        assert agg.best_case - agg.worst_case > con.best_case - con.worst_case

    def test_cancel_event_stops_task(self, aggressive, huge_params, source):
        event = threading.Event()
        event.set()
        task = PortfolioSimulationTask(aggressive, huge_params, source, cancel_event=event)
        with pytest.raises(SimulationCancelledError, match="Aggressive"):
            task.run()

    def test_callable(self, riskless, small_params, source):
        task = PortfolioSimulationTask(riskless, small_params, source)
        assert task() == task.run()
        assert "Riskless" in repr(task)

    def test_negative_risk_behaves_like_absolute_risk(self, aggressive, seed):
        params = SimulationParameters(horizon_years=10, iterations_per_portfolio=4000)
        mirrored = Portfolio("Mirrored", aggressive.mean_return, -aggressive.risk)
        pos = PortfolioSimulationTask(aggressive, params, RandomReturnSource(seed)).run()
        neg = PortfolioSimulationTask(mirrored, params, RandomReturnSource(seed + 1)).run()
        assert neg.worst_case <= neg.median <= neg.best_case
        assert neg.median == pytest.approx(pos.median, rel=0.05)
        assert neg.best_case - neg.worst_case == pytest.approx(pos.best_case - pos.worst_case, rel=0.15)
