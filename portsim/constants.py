"""
Global constants for PortSim.

Purpose
-------
Centralizes default values used throughout the PortSim codebase. The
simulation defaults reproduce the classic two-portfolio retirement run
(100,000 invested for 20 years at 3.5% inflation, 10,000 trajectories,
2 second time budget).

Usage
-----
>>> from portsim.constants import DEFAULT_ITERATIONS, DEFAULT_TIME_BUDGET_MS
>>> params = SimulationParameters(iterations_per_portfolio=DEFAULT_ITERATIONS)

Categories
----------
- Simulation: starting amount, horizon, inflation, trajectory counts
- Orchestration: time budget
- Statistics: percentiles reported per portfolio
"""

__all__ = [
    # Simulation
    "DEFAULT_STARTING_AMOUNT",
    "DEFAULT_HORIZON_YEARS",
    "DEFAULT_INFLATION_RATE",
    "DEFAULT_ITERATIONS",
    # Orchestration
    "DEFAULT_TIME_BUDGET_MS",
    # Statistics
    "MEDIAN_PERCENTILE",
    "BEST_CASE_PERCENTILE",
    "WORST_CASE_PERCENTILE",
]


# =============================================================================
# Simulation Defaults
# =============================================================================

DEFAULT_STARTING_AMOUNT: float = 100_000.0
"""Default amount invested at the start of every trajectory."""

DEFAULT_HORIZON_YEARS: int = 20
"""Default number of compounding years per trajectory."""

DEFAULT_INFLATION_RATE: float = 3.5
"""Default annual inflation rate, in percent."""

DEFAULT_ITERATIONS: int = 10_000
"""Default number of Monte Carlo trajectories per portfolio."""


# =============================================================================
# Orchestration Defaults
# =============================================================================

DEFAULT_TIME_BUDGET_MS: int = 2000
"""Default wall-clock budget for the whole run, in milliseconds."""


# =============================================================================
# Statistics
# =============================================================================

MEDIAN_PERCENTILE: float = 50.0
"""Percentile reported as the median outcome."""

BEST_CASE_PERCENTILE: float = 90.0
"""Percentile reported as the best case (top 10% boundary)."""

WORST_CASE_PERCENTILE: float = 10.0
"""Percentile reported as the worst case (bottom 10% boundary)."""
