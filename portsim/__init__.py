"""
PortSim - Monte Carlo Portfolio Outcome Simulator

Estimates the distribution of inflation-adjusted ending values for a set
of named portfolios by simulating many multi-year return trajectories per
portfolio, concurrently, under a single wall-clock time budget.

Modules
-------
- returns       : Normal annual-return sampling with independent generators
- simulation    : Trajectory compounding and per-portfolio tasks
- statistics    : Percentile rule and distribution summaries
- orchestrator  : Concurrent fan-out/fan-in with a time budget
- config        : Pydantic run configuration and settings
- reporting     : Rich and plain-text result tables
"""

from .portfolio import Portfolio, default_portfolios
from .returns import RandomReturnSource
from .simulation import SimulationParameters, TrajectorySimulator, PortfolioSimulationTask
from .statistics import Result, percentile, summarize
from .orchestrator import OutcomeStatus, PortfolioOutcome, RunReport, SimulationOrchestrator
from . import exceptions
