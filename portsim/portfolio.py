"""
Portfolio definitions for PortSim.

A portfolio is a named pair of annual return statistics expressed in
percent: the mean annual return and its standard deviation ("risk").
Portfolios are immutable and shared read-only across simulation tasks.

Typical usage
-------------
>>> from portsim.portfolio import Portfolio, default_portfolios
>>> growth = Portfolio("Growth", mean_return=8.0, risk=12.0)
>>> [p.name for p in default_portfolios()]
['Aggressive', 'Very Conservative']
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .exceptions import ValidationError

__all__ = [
    "Portfolio",
    "DEFAULT_PORTFOLIOS",
    "default_portfolios",
]


@dataclass(frozen=True)
class Portfolio:
    """
    Named portfolio with normally distributed annual returns.

    Parameters
    ----------
    name : str
        Portfolio identifier, unique within a run.
    mean_return : float
        Mean annual nominal return in percent (e.g. 9.4324 for 9.43%).
    risk : float
        Standard deviation of the annual return in percent. Zero gives a
        deterministic portfolio; a negative value mirrors the draws and so
        behaves like its absolute value. Range checks live in
        ``PortfolioConfig``.
    """

    name: str
    mean_return: float
    risk: float

    def __post_init__(self) -> None:
        if not self.name:
            raise ValidationError("Portfolio name must be a non-empty string.")

    def __str__(self) -> str:
        return f"{self.name} (mean {self.mean_return:.4f}%, risk {self.risk:.4f}%)"


DEFAULT_PORTFOLIOS: Tuple[Tuple[str, float, float], ...] = (
    ("Aggressive", 9.4324, 15.675),
    ("Very Conservative", 6.189, 6.3438),
)
"""Built-in portfolio set as (name, mean_return %, risk %)."""


def default_portfolios() -> List[Portfolio]:
    """Return the built-in portfolios in their canonical order."""
    return [Portfolio(name, mean, risk) for name, mean, risk in DEFAULT_PORTFOLIOS]
