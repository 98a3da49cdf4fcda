"""
Configuration management module for PortSim.

Purpose
-------
Centralized configuration using Pydantic models for type-safe parameter
management, validation, and serialization of run definitions, plus
environment-driven application settings.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for run files
- Defaults: the classic two-portfolio, 20-year run

Example
-------
>>> from portsim.config import RunConfig, PortfolioConfig
>>> cfg = RunConfig(portfolios=[PortfolioConfig(name="Growth", mean_return=8, risk=12)])
>>> cfg.simulation.horizon_years
20
>>> params = cfg.simulation.to_parameters()
>>> json_str = cfg.model_dump_json()
>>> loaded = RunConfig.model_validate_json(json_str)
"""

from __future__ import annotations
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from .constants import (
    DEFAULT_HORIZON_YEARS,
    DEFAULT_INFLATION_RATE,
    DEFAULT_ITERATIONS,
    DEFAULT_STARTING_AMOUNT,
    DEFAULT_TIME_BUDGET_MS,
)
from .portfolio import DEFAULT_PORTFOLIOS, Portfolio
from .simulation import SimulationParameters

__all__ = [
    "PortfolioConfig",
    "SimulationConfig",
    "RunConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Portfolio Configuration
# ---------------------------------------------------------------------------

class PortfolioConfig(BaseModel):
    """
    Configuration for a single portfolio.

    Attributes
    ----------
    name : str
        Portfolio identifier (e.g., "Aggressive").
    mean_return : float
        Mean annual return in percent (e.g., 9.4324).
    risk : float
        Annual return standard deviation in percent (e.g., 15.675).

    Examples
    --------
    >>> PortfolioConfig(name="Aggressive", mean_return=9.4324, risk=15.675)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        min_length=1,
        max_length=50,
        description="Portfolio name/identifier"
    )
    mean_return: float = Field(
        gt=-100,
        le=1000,
        description="Mean annual return (percent)"
    )
    risk: float = Field(
        ge=0,
        le=1000,
        description="Annual return standard deviation (percent)"
    )

    def to_portfolio(self) -> Portfolio:
        return Portfolio(self.name, self.mean_return, self.risk)


def _default_portfolio_configs() -> List[PortfolioConfig]:
    return [
        PortfolioConfig(name=name, mean_return=mean, risk=risk)
        for name, mean, risk in DEFAULT_PORTFOLIOS
    ]


# ---------------------------------------------------------------------------
# Simulation Configuration
# ---------------------------------------------------------------------------

class SimulationConfig(BaseModel):
    """
    Configuration for Monte Carlo simulation parameters.

    Attributes
    ----------
    starting_amount : float
        Amount invested at the start of every trajectory.
    horizon_years : int
        Compounding years per trajectory (0-200).
    inflation_rate_percent : float
        Annual inflation rate in percent.
    iterations_per_portfolio : int
        Trajectories per portfolio (1-10,000,000).

    Examples
    --------
    >>> config = SimulationConfig(horizon_years=30, iterations_per_portfolio=5000)
    >>> config.to_parameters().horizon_years
    30
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    starting_amount: float = Field(
        default=DEFAULT_STARTING_AMOUNT,
        description="Initial investment amount"
    )
    horizon_years: int = Field(
        default=DEFAULT_HORIZON_YEARS,
        ge=0,
        le=200,
        description="Simulation horizon (years)"
    )
    inflation_rate_percent: float = Field(
        default=DEFAULT_INFLATION_RATE,
        gt=-100,
        le=1000,
        description="Annual inflation rate (percent)"
    )
    iterations_per_portfolio: int = Field(
        default=DEFAULT_ITERATIONS,
        ge=1,
        le=10_000_000,
        description="Monte Carlo trajectories per portfolio"
    )

    def to_parameters(self) -> SimulationParameters:
        return SimulationParameters(
            starting_amount=self.starting_amount,
            horizon_years=self.horizon_years,
            inflation_rate_percent=self.inflation_rate_percent,
            iterations_per_portfolio=self.iterations_per_portfolio,
        )


# ---------------------------------------------------------------------------
# Run Configuration
# ---------------------------------------------------------------------------

class RunConfig(BaseModel):
    """
    Complete definition of a simulation run.

    Attributes
    ----------
    portfolios : list of PortfolioConfig
        Portfolios in display order; names must be unique.
    simulation : SimulationConfig
        Parameters shared by all portfolios.
    time_budget_ms : int
        Wall-clock budget for the whole run, in milliseconds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: Optional[str] = Field(
        default=None,
        description="Run file schema version"
    )
    portfolios: List[PortfolioConfig] = Field(
        default_factory=_default_portfolio_configs,
        description="Portfolios to simulate"
    )
    simulation: SimulationConfig = Field(
        default_factory=SimulationConfig,
        description="Simulation parameters"
    )
    time_budget_ms: int = Field(
        default=DEFAULT_TIME_BUDGET_MS,
        ge=0,
        description="Time budget for the whole run (milliseconds)"
    )

    @field_validator("portfolios")
    @classmethod
    def validate_unique_names(cls, v):
        """Ensure portfolio names are unique."""
        names = [p.name for p in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Portfolio names must be unique, duplicated: {duplicates}")
        return v

    def to_portfolios(self) -> List[Portfolio]:
        return [p.to_portfolio() for p in self.portfolios]

    @property
    def time_budget_seconds(self) -> float:
        return self.time_budget_ms / 1000.0


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with PORTSIM_ (e.g., PORTSIM_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    default_time_budget_ms : int
        Time budget used by the CLI when neither the run file nor the
        command line sets one
    max_workers : int, optional
        Upper bound on simulation threads (default: one per portfolio)

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = ConfigDict(
        env_prefix="PORTSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    default_time_budget_ms: int = Field(
        default=DEFAULT_TIME_BUDGET_MS,
        ge=0,
        description="Default time budget (milliseconds)"
    )
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        le=256,
        description="Maximum simulation worker threads"
    )
