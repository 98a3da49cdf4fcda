"""
Custom exceptions for PortSim.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all PortSim modules. All exceptions inherit from PortSimError,
enabling catch-all handling when needed.

Exception Hierarchy
-------------------
PortSimError (base)
├── ConfigurationError - Invalid simulation parameters or config files
├── ValidationError - Data validation failures
│   └── InvalidArgumentError - Percentile outside [0, 100], empty sample
└── SimulationError - Failures inside the simulation engine
    └── SimulationCancelledError - Task stopped after its deadline

Usage
-----
>>> from portsim.exceptions import InvalidArgumentError, PortSimError
>>>
>>> # Raise specific exception
>>> raise InvalidArgumentError("percentile must be in [0, 100], got 120")
>>>
>>> # Catch all PortSim exceptions
>>> try:
...     report = orchestrator.run_all(portfolios, params, time_budget=2.0)
>>> except PortSimError as e:
...     print(f"PortSim error: {e}")
"""


class PortSimError(Exception):
    """
    Base exception for all PortSim errors.

    Examples
    --------
    >>> try:
    ...     load_run_config(path)
    ... except PortSimError as e:
    ...     logger.error(f"Could not load run: {e}")
    """
    pass


class ConfigurationError(PortSimError):
    """
    Invalid configuration or parameters.

    Raised when simulation configuration is invalid, such as:
    - iterations_per_portfolio < 1
    - negative horizon_years
    - malformed run configuration files

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "iterations_per_portfolio must be >= 1, got 0."
    ... )
    """
    pass


class ValidationError(PortSimError):
    """
    Data validation failures.

    Raised when input values fail validation checks, such as:
    - Negative volatility
    - Duplicate portfolio names
    - Negative time budgets
    """
    pass


class InvalidArgumentError(ValidationError):
    """
    Invalid argument to a statistics routine.

    Raised synchronously by the distribution summarizer when:
    - A percentile outside [0, 100] is requested
    - The sample is empty

    Examples
    --------
    >>> raise InvalidArgumentError(
    ...     f"Invalid value for percentile: {p}. Must be in [0, 100]."
    ... )
    """
    pass


class SimulationError(PortSimError):
    """
    Failures inside the simulation engine.

    Per-portfolio failures are captured by the orchestrator and reported
    as FAILED outcomes; they never abort sibling portfolios.
    """
    pass


class SimulationCancelledError(SimulationError):
    """
    A portfolio task was asked to stop.

    Raised by a running task at the next trajectory boundary once the
    orchestrator's time budget has expired. Never surfaced to callers of
    ``SimulationOrchestrator.run_all``.
    """
    pass
