"""
Concurrent multi-portfolio simulation with a single wall-clock deadline.

Purpose
-------
Fans out one PortfolioSimulationTask per portfolio onto a thread pool,
waits once for at most the time budget, and fans the outcomes back in,
in input order. Every portfolio ends in exactly one state:

    COMPLETED  the task returned a Result within the budget
    TIMED_OUT  the task was still pending or running at the deadline
    FAILED     the task raised; the error is kept with the portfolio name

Timeout policy
--------------
When the budget expires, tasks that have not started are cancelled, running
tasks are told to stop through a shared ``threading.Event`` (checked between
trajectories), and the pool is shut down without waiting for them. Their
partial work is discarded.

Example
-------
>>> from portsim.portfolio import default_portfolios
>>> from portsim.simulation import SimulationParameters
>>> report = SimulationOrchestrator().run_all(
...     default_portfolios(), SimulationParameters(), time_budget=2.0
... )
>>> [o.status.value for o in report.outcomes]
['completed', 'completed']
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .exceptions import SimulationCancelledError, ValidationError
from .portfolio import Portfolio
from .returns import RandomReturnSource
from .simulation import PortfolioSimulationTask, SimulationParameters
from .statistics import Result

__all__ = [
    "OutcomeStatus",
    "PortfolioOutcome",
    "RunReport",
    "SimulationOrchestrator",
]

logger = logging.getLogger(__name__)

TimeBudget = Union[float, int, timedelta]


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

class OutcomeStatus(str, Enum):
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class PortfolioOutcome:
    """Final state of one portfolio. ``result`` is set only when COMPLETED."""

    name: str
    status: OutcomeStatus
    result: Optional[Result] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.COMPLETED


@dataclass(frozen=True)
class RunReport:
    """
    Ordered outcomes of a run plus its timing.

    Attributes
    ----------
    outcomes : tuple of PortfolioOutcome
        One entry per input portfolio, in input order.
    elapsed_seconds : float
        Wall-clock time from submission to collection.
    time_budget_seconds : float
        Budget the run was given.
    parameters : SimulationParameters
        Parameters shared by every task.
    """

    outcomes: Tuple[PortfolioOutcome, ...]
    elapsed_seconds: float
    time_budget_seconds: float
    parameters: SimulationParameters

    @property
    def results(self) -> List[Optional[Result]]:
        """Result per portfolio in input order, None where incomplete or failed."""
        return [o.result for o in self.outcomes]

    @property
    def completed(self) -> List[PortfolioOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.COMPLETED]

    @property
    def timed_out(self) -> List[PortfolioOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.TIMED_OUT]

    @property
    def failed(self) -> List[PortfolioOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]

    @property
    def all_completed(self) -> bool:
        return all(o.ok for o in self.outcomes)

    def by_name(self) -> Dict[str, PortfolioOutcome]:
        return {o.name: o for o in self.outcomes}

    def to_frame(self) -> pd.DataFrame:
        """
        Tabular view of the report indexed by portfolio name.

        Returns
        -------
        pd.DataFrame
            Columns: status, median, best_case, worst_case, error. Numeric
            columns are NaN for portfolios without a result.
        """
        nan = float("nan")
        rows = []
        for o in self.outcomes:
            if o.result is not None:
                values = o.result.as_dict()
                values.pop("name")
            else:
                values = {"median": nan, "best_case": nan, "worst_case": nan}
            rows.append({"portfolio": o.name, "status": o.status.value, **values, "error": o.error})
        columns = ["portfolio", "status", "median", "best_case", "worst_case", "error"]
        return pd.DataFrame(rows, columns=columns).set_index("portfolio")


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

def _budget_seconds(time_budget: TimeBudget) -> float:
    seconds = time_budget.total_seconds() if isinstance(time_budget, timedelta) else float(time_budget)
    if seconds < 0:
        raise ValidationError(f"time_budget must be non-negative, got {seconds} s.")
    return seconds


class SimulationOrchestrator:
    """
    Runs one simulation task per portfolio concurrently under a time budget.

    Parameters
    ----------
    max_workers : int, optional
        Upper bound on pool threads. Defaults to one thread per portfolio.
    seed : int, optional
        Root entropy for the per-task generators. Intended for tests;
        leave as None for independent runs.
    """

    def __init__(self, max_workers: Optional[int] = None, seed: Optional[int] = None):
        if max_workers is not None and max_workers < 1:
            raise ValidationError(f"max_workers must be >= 1, got {max_workers}.")
        self.max_workers = max_workers
        self.seed = seed

    def run_all(
        self,
        portfolios: Sequence[Portfolio],
        params: SimulationParameters,
        time_budget: TimeBudget,
    ) -> RunReport:
        """
        Simulate every portfolio and collect what finished within the budget.

        Parameters
        ----------
        portfolios : sequence of Portfolio
            Portfolios to simulate; names must be unique.
        params : SimulationParameters
            Parameters shared by all tasks.
        time_budget : float or timedelta
            Total wall-clock budget in seconds for the single wait.

        Returns
        -------
        RunReport
            Outcomes in input order and elapsed time.

        Raises
        ------
        ValidationError
            On duplicate portfolio names or a negative budget.
        """
        budget = _budget_seconds(time_budget)
        names = [p.name for p in portfolios]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationError(f"Portfolio names must be unique, duplicated: {duplicates}")

        start = time.perf_counter()
        if not portfolios:
            return RunReport((), time.perf_counter() - start, budget, params)

        sources = RandomReturnSource(self.seed).spawn(len(portfolios))
        cancel_event = threading.Event()
        workers = self.max_workers or len(portfolios)
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="portsim")
        try:
            futures: List[Future] = []
            for portfolio, source in zip(portfolios, sources):
                task = PortfolioSimulationTask(portfolio, params, source, cancel_event)
                futures.append(executor.submit(task.run))
            logger.info(
                "Submitted %d portfolio task(s) on %d worker(s), budget %.3f s",
                len(futures), workers, budget,
            )

            done, not_done = wait(futures, timeout=budget)
            if not_done:
                cancel_event.set()
                for f in not_done:
                    f.cancel()

            outcomes = tuple(
                self._collect(portfolio, future, future in done)
                for portfolio, future in zip(portfolios, futures)
            )
        finally:
            # Never block on abandoned tasks; they exit at their next trajectory.
            cancel_event.set()
            executor.shutdown(wait=False, cancel_futures=True)

        elapsed = time.perf_counter() - start
        logger.info(
            "Run finished in %.3f s: %d completed, %d timed out, %d failed",
            elapsed,
            sum(o.status is OutcomeStatus.COMPLETED for o in outcomes),
            sum(o.status is OutcomeStatus.TIMED_OUT for o in outcomes),
            sum(o.status is OutcomeStatus.FAILED for o in outcomes),
        )
        return RunReport(outcomes, elapsed, budget, params)

    @staticmethod
    def _collect(portfolio: Portfolio, future: Future, finished: bool) -> PortfolioOutcome:
        if not finished:
            logger.warning("Portfolio '%s' did not finish within the time budget", portfolio.name)
            return PortfolioOutcome(portfolio.name, OutcomeStatus.TIMED_OUT)

        error = future.exception()
        if isinstance(error, SimulationCancelledError):
            # finished only because it noticed the deadline
            return PortfolioOutcome(portfolio.name, OutcomeStatus.TIMED_OUT)
        if error is not None:
            logger.warning("Portfolio '%s' failed: %s: %s",
                           portfolio.name, type(error).__name__, error)
            logger.debug("Traceback for portfolio '%s'", portfolio.name, exc_info=error)
            return PortfolioOutcome(
                portfolio.name, OutcomeStatus.FAILED, error=f"{type(error).__name__}: {error}"
            )

        result = future.result()
        logger.debug("Portfolio '%s' completed: %s", portfolio.name, result)
        return PortfolioOutcome(portfolio.name, OutcomeStatus.COMPLETED, result=result)
