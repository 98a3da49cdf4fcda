"""
Stochastic annual return generation for PortSim portfolios.

Mathematical Model
------------------
Annual nominal returns (in percent) are IID normal:
    R_t ~ Normal(μ, σ)

sampled as R_t = μ + σ · Z_t with Z_t ~ N(0, 1). This matches the classic
"Gaussian times risk plus mean" construction and accepts any real μ and σ,
including σ = 0 (point distribution at μ).

Design principles
-----------------
- One generator per consumer: every simulation task owns an independent
  ``numpy.random.Generator`` spawned from a common ``SeedSequence``, so
  concurrent tasks never share mutable RNG state.
- Block sampling: a trajectory draws all of its annual returns in a single
  call to keep per-year Python overhead out of the hot loop.
"""

from __future__ import annotations
from typing import List, Optional, Union

import numpy as np

__all__ = ["RandomReturnSource"]

SeedLike = Union[None, int, np.random.SeedSequence]


class RandomReturnSource:
    """
    Normal annual-return sampler backed by a private PCG64 generator.

    Parameters
    ----------
    seed : int or numpy.random.SeedSequence, optional
        Entropy for the generator. If None, fresh OS entropy is used, so
        results differ from run to run.

    Methods
    -------
    annual_returns(mean_return, risk, size) -> np.ndarray
        Block of ``size`` IID annual return draws, in percent. This is the
        path ``TrajectorySimulator`` samples through, one block per trajectory.
    next_annual_return(mean_return, risk) -> float
        Single draw from the same distribution, for callers that step one
        year at a time.
    spawn(n) -> List[RandomReturnSource]
        Independent child sources, one per concurrent consumer.

    Notes
    -----
    Instances are not thread-safe; give each thread its own source via
    ``spawn`` instead of sharing one.

    Examples
    --------
    >>> source = RandomReturnSource(seed=7)
    >>> r = source.next_annual_return(6.0, 10.0)
    >>> block = source.annual_returns(6.0, 10.0, size=20)
    >>> block.shape
    (20,)
    >>> children = source.spawn(2)
    """

    def __init__(self, seed: SeedLike = None):
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seed_seq)

    def next_annual_return(self, mean_return: float, risk: float) -> float:
        """Draw one annual return (percent) from Normal(mean_return, risk)."""
        return float(mean_return + risk * self._rng.standard_normal())

    def annual_returns(self, mean_return: float, risk: float, size: int) -> np.ndarray:
        """
        Draw ``size`` IID annual returns (percent).

        Returns
        -------
        np.ndarray, shape (size,)
            Float64 samples; empty when ``size`` is 0.
        """
        if size <= 0:
            return np.zeros(0, dtype=float)
        return mean_return + risk * self._rng.standard_normal(size)

    def spawn(self, n: int) -> List["RandomReturnSource"]:
        """Return ``n`` statistically independent child sources."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        return [RandomReturnSource(child) for child in self._seed_seq.spawn(n)]

    def __repr__(self) -> str:
        return f"RandomReturnSource(entropy={self._seed_seq.entropy})"
