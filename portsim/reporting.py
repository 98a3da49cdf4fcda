"""
Rendering of run reports.

Two renderings of the same RunReport:

- ``build_table``: a rich Table for terminals.
- ``format_plain_table``: fixed-width ASCII, one row per portfolio, for
  logs and non-interactive output.

Rows without a result show their status (``timed out`` or
``failed: <error>``) in place of the numbers.
"""
from __future__ import annotations

from typing import List

from rich.table import Table

from .orchestrator import OutcomeStatus, PortfolioOutcome, RunReport

__all__ = [
    "ordinal",
    "status_label",
    "build_table",
    "format_plain_table",
    "format_elapsed",
]

_BORDER = "+----------------------+-----------------+-----------------+-----------------+"
_ROW = "| {:<20} | {:<15} | {:<15} | {:<15} |"


def ordinal(n: int) -> str:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th", 20 -> "20th"."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def status_label(outcome: PortfolioOutcome) -> str:
    if outcome.status is OutcomeStatus.COMPLETED:
        return "ok"
    if outcome.status is OutcomeStatus.TIMED_OUT:
        return "timed out"
    return f"failed: {outcome.error}"


def build_table(report: RunReport) -> Table:
    """Rich table with one row per portfolio, in input order."""
    years = report.parameters.horizon_years
    table = Table(title="Monte Carlo Simulation Results", show_header=True)
    table.add_column("Portfolio", style="cyan")
    table.add_column(f"Median {ordinal(years)} Year", justify="right")
    table.add_column("10% Best Case", justify="right", style="green")
    table.add_column("10% Worst Case", justify="right", style="red")
    table.add_column("Status")

    for o in report.outcomes:
        if o.result is not None:
            r = o.result
            table.add_row(o.name, f"${r.median:,.2f}", f"${r.best_case:,.2f}",
                          f"${r.worst_case:,.2f}", status_label(o))
        else:
            style = "yellow" if o.status is OutcomeStatus.TIMED_OUT else "bold red"
            table.add_row(o.name, "-", "-", "-", f"[{style}]{status_label(o)}[/{style}]")
    return table


def format_plain_table(report: RunReport) -> str:
    """
    Fixed-width ASCII table.

    Examples
    --------
    >>> print(format_plain_table(report))
    +----------------------+-----------------+-----------------+-----------------+
    | Column name          | Median 20th Year| 10 % Best Case  | 10 % Worst Case |
    +----------------------+-----------------+-----------------+-----------------+
    | Aggressive           | 205432.118273   | 570112.902117   | 74311.004520    |
    ...
    """
    years = report.parameters.horizon_years
    header = "| {:<20} | {:<16}| {:<15} | {:<15} |".format(
        "Column name", f"Median {ordinal(years)} Year", "10 % Best Case", "10 % Worst Case"
    )
    lines: List[str] = [_BORDER, header, _BORDER]
    for o in report.outcomes:
        if o.result is not None:
            r = o.result
            lines.append(_ROW.format(o.name, f"{r.median:f}", f"{r.best_case:f}", f"{r.worst_case:f}"))
        else:
            label = status_label(o)
            lines.append(_ROW.format(o.name, label[:15], "-", "-"))
    lines.append(_BORDER)
    return "\n".join(lines)


def format_elapsed(report: RunReport) -> str:
    """Total wall-clock time of the run, in whole milliseconds."""
    return f"Total Time -> {int(round(report.elapsed_seconds * 1000))}"
