"""Trajectory simulation for PortSim

Compounds randomly drawn annual returns into inflation-adjusted ending
values, one trajectory at a time, and reduces many trajectories of one
portfolio to a percentile summary.

Model
-----
For each year t = 1..T with nominal return R_t (percent) and inflation i
(percent):

    g_t = (1 + R_t / 100) / (1 + i / 100) - 1      real growth
    W_t = W_{t-1} * (1 + g_t)                       W_0 = starting amount

Negative ending values are possible when a return falls below -100% and
are propagated unclamped.

Typical usage
-------------
>>> from portsim.portfolio import Portfolio
>>> params = SimulationParameters(iterations_per_portfolio=1000)
>>> task = PortfolioSimulationTask(Portfolio("Growth", 8.0, 12.0), params)
>>> result = task.run()
>>> result.worst_case <= result.median <= result.best_case
True
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .constants import (
    DEFAULT_HORIZON_YEARS,
    DEFAULT_INFLATION_RATE,
    DEFAULT_ITERATIONS,
    DEFAULT_STARTING_AMOUNT,
)
from .exceptions import ConfigurationError, SimulationCancelledError
from .portfolio import Portfolio
from .returns import RandomReturnSource
from .statistics import Result, summarize

__all__ = [
    "SimulationParameters",
    "TrajectorySimulator",
    "PortfolioSimulationTask",
]


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SimulationParameters:
    """Process-wide simulation settings, shared read-only by every task."""

    starting_amount: float = DEFAULT_STARTING_AMOUNT
    horizon_years: int = DEFAULT_HORIZON_YEARS
    inflation_rate_percent: float = DEFAULT_INFLATION_RATE
    iterations_per_portfolio: int = DEFAULT_ITERATIONS

    def __post_init__(self) -> None:
        if self.iterations_per_portfolio < 1:
            raise ConfigurationError(
                f"iterations_per_portfolio must be >= 1, got {self.iterations_per_portfolio}."
            )
        if self.horizon_years < 0:
            raise ConfigurationError(
                f"horizon_years must be >= 0, got {self.horizon_years}."
            )
        if self.inflation_rate_percent <= -100:
            raise ConfigurationError(
                f"inflation_rate_percent must be > -100, got {self.inflation_rate_percent}. "
                f"A value <= -100 makes the real growth factor undefined."
            )


# ---------------------------------------------------------------------------
# Single trajectory
# ---------------------------------------------------------------------------

class TrajectorySimulator:
    """Compounds one inflation-adjusted trajectory per call.

    Parameters
    ----------
    source : RandomReturnSource, optional
        Return sampler. A freshly seeded source is created when omitted.
    """

    def __init__(self, source: Optional[RandomReturnSource] = None):
        self.source = source if source is not None else RandomReturnSource()

    def simulate_once(self, portfolio: Portfolio, params: SimulationParameters) -> float:
        """Simulate ``params.horizon_years`` of returns and return the ending amount."""
        if params.horizon_years == 0:
            return float(params.starting_amount)
        rates = self.source.annual_returns(
            portfolio.mean_return, portfolio.risk, params.horizon_years
        )
        real_growth = (1.0 + rates / 100.0) / (1.0 + params.inflation_rate_percent / 100.0) - 1.0
        # compound year by year, in draw order
        amount = float(params.starting_amount)
        for g in real_growth:
            amount = amount * (1.0 + g)
        return float(amount)


# ---------------------------------------------------------------------------
# One portfolio
# ---------------------------------------------------------------------------

class PortfolioSimulationTask:
    """Runs every trajectory of one portfolio and summarizes the outcomes.

    The task is a pure function of its inputs modulo randomness: it owns its
    return source and shares only the immutable portfolio and parameters.
    An optional ``cancel_event`` is polled between trajectories; once set,
    ``run`` raises :class:`SimulationCancelledError` instead of returning a
    partial result.
    """

    def __init__(
        self,
        portfolio: Portfolio,
        params: SimulationParameters,
        source: Optional[RandomReturnSource] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.portfolio = portfolio
        self.params = params
        self.simulator = TrajectorySimulator(source)
        self.cancel_event = cancel_event

    def run(self) -> Result:
        n = self.params.iterations_per_portfolio
        outcomes = np.empty(n, dtype=float)
        for k in range(n):
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise SimulationCancelledError(
                    f"Portfolio '{self.portfolio.name}' cancelled after {k} of {n} trajectories."
                )
            outcomes[k] = self.simulator.simulate_once(self.portfolio, self.params)
        return summarize(self.portfolio.name, outcomes)

    def __call__(self) -> Result:
        return self.run()

    def __repr__(self) -> str:
        return (f"PortfolioSimulationTask(portfolio={self.portfolio.name!r}, "
                f"iterations={self.params.iterations_per_portfolio})")
