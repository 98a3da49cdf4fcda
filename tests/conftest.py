"""
Pytest configuration and fixtures for the PortSim test suite.

Fixtures keep trajectory counts small so unit tests stay fast; the
integration suite uses the full-size classic run.
"""

from typing import List

import pytest

from portsim.orchestrator import OutcomeStatus, PortfolioOutcome, RunReport
from portsim.portfolio import Portfolio
from portsim.returns import RandomReturnSource
from portsim.simulation import SimulationParameters
from portsim.statistics import Result


# ---------------------------------------------------------------------------
# Randomness
# ---------------------------------------------------------------------------

@pytest.fixture
def seed() -> int:
    """Standard random seed for reproducibility."""
    return 42


@pytest.fixture
def source(seed) -> RandomReturnSource:
    """Seeded return source."""
    return RandomReturnSource(seed=seed)


# ---------------------------------------------------------------------------
# Portfolio Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def aggressive() -> Portfolio:
    """High-return, high-volatility portfolio (9.4324% mean, 15.675% risk)."""
    return Portfolio("Aggressive", 9.4324, 15.675)


@pytest.fixture
def very_conservative() -> Portfolio:
    """Low-volatility portfolio (6.189% mean, 6.3438% risk)."""
    return Portfolio("Very Conservative", 6.189, 6.3438)


@pytest.fixture
def riskless() -> Portfolio:
    """Zero-volatility portfolio; every trajectory is identical."""
    return Portfolio("Riskless", 5.0, 0.0)


@pytest.fixture
def portfolios(aggressive, very_conservative) -> List[Portfolio]:
    """The classic two-portfolio set, in display order."""
    return [aggressive, very_conservative]


# ---------------------------------------------------------------------------
# Parameter Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def small_params() -> SimulationParameters:
    """Quick parameters: 20 years, 500 trajectories."""
    return SimulationParameters(
        starting_amount=100_000,
        horizon_years=20,
        inflation_rate_percent=3.5,
        iterations_per_portfolio=500,
    )


@pytest.fixture
def huge_params() -> SimulationParameters:
    """Parameters that cannot finish within a zero time budget."""
    return SimulationParameters(iterations_per_portfolio=10_000_000)


# ---------------------------------------------------------------------------
# Report Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mixed_report(small_params) -> RunReport:
    """Hand-built report with one outcome of each status."""
    return RunReport(
        outcomes=(
            PortfolioOutcome(
                "Aggressive",
                OutcomeStatus.COMPLETED,
                result=Result("Aggressive", median=200_000.0, best_case=500_000.0, worst_case=80_000.0),
            ),
            PortfolioOutcome("Slow", OutcomeStatus.TIMED_OUT),
            PortfolioOutcome("Broken", OutcomeStatus.FAILED, error="FloatingPointError: overflow"),
        ),
        elapsed_seconds=1.234,
        time_budget_seconds=2.0,
        parameters=small_params,
    )
