"""
Distribution summaries for simulated ending values.

Percentile rule
---------------
For a sample sorted ascending, x[0] <= ... <= x[n-1], and p in [0, 100]:

    p == 0            -> x[0]
    p == 100          -> x[n-1]
    n == 1            -> x[0]
    index = p * n / 100,  lower = floor(index)
    lower == index    -> x[lower]
    otherwise         -> (x[lower] + x[lower - 1]) / 2

There is no linear interpolation. When ``lower`` is 0 and ``index`` is not
an integer there is no lower neighbour and x[0] is returned.

``percentile`` never sorts; callers pass pre-sorted data. ``summarize``
sorts a copy and reports the median, the 90th percentile (best case) and
the 10th percentile (worst case).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

import numpy as np

from .constants import (
    BEST_CASE_PERCENTILE,
    MEDIAN_PERCENTILE,
    WORST_CASE_PERCENTILE,
)
from .exceptions import InvalidArgumentError

__all__ = [
    "Result",
    "percentile",
    "summarize",
]

ArrayLike = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class Result:
    """Summary of one portfolio's simulated ending values."""

    name: str
    median: float
    best_case: float
    worst_case: float

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "median": self.median,
            "best_case": self.best_case,
            "worst_case": self.worst_case,
        }


def percentile(sorted_values: ArrayLike, p: float) -> float:
    """
    Percentile of a pre-sorted sample using the midpoint tie-break rule.

    Parameters
    ----------
    sorted_values : sequence of float
        Sample sorted ascending. Must be non-empty.
    p : float
        Requested percentile in [0, 100].

    Returns
    -------
    float

    Raises
    ------
    InvalidArgumentError
        If ``p`` is outside [0, 100] or the sample is empty.

    Examples
    --------
    >>> percentile([1.0, 2.0, 3.0, 4.0], 50)
    3.0
    >>> percentile([1.0, 2.0, 3.0], 50)
    1.5
    """
    if math.isnan(p) or p < 0 or p > 100:
        raise InvalidArgumentError(f"Invalid value for percentile: {p}. Must be in [0, 100].")
    n = len(sorted_values)
    if n == 0:
        raise InvalidArgumentError("Cannot compute a percentile of an empty sample.")

    if p == 0:
        return float(sorted_values[0])
    if p == 100:
        return float(sorted_values[n - 1])
    if n == 1:
        return float(sorted_values[0])

    index = p * n / 100.0
    lower = math.floor(index)
    if lower == index:
        return float(sorted_values[lower])
    if lower == 0:
        return float(sorted_values[0])
    return (float(sorted_values[lower]) + float(sorted_values[lower - 1])) / 2.0


def summarize(name: str, outcomes: Iterable[float]) -> Result:
    """
    Sort a copy of ``outcomes`` and reduce it to a :class:`Result`.

    Raises
    ------
    InvalidArgumentError
        If ``outcomes`` is empty.
    """
    # np.sort returns a copy; the caller's sequence is left untouched
    ordered = np.sort(np.asarray(list(outcomes), dtype=float))
    return Result(
        name=name,
        median=percentile(ordered, MEDIAN_PERCENTILE),
        best_case=percentile(ordered, BEST_CASE_PERCENTILE),
        worst_case=percentile(ordered, WORST_CASE_PERCENTILE),
    )
