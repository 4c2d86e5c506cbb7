"""
Random draws used by the simulators.
"""

from typing import List, Sequence

import numpy as np


def sample_without_replacement(
    population: Sequence[int],
    k: int,
    rng: np.random.Generator
) -> List[int]:
    """
    Draw k distinct items uniformly from a finite population.

    Performs the first k steps of a Fisher-Yates shuffle on a copy of the
    population, so the population itself is left untouched.

    Parameters
    ----------
    population : sequence of int
        Items to draw from
    k : int
        Number of items to draw (0 <= k <= len(population))
    rng : numpy.random.Generator
        Source of randomness

    Returns
    -------
    list of int
        The k drawn items, in draw order
    """
    n = len(population)
    if not 0 <= k <= n:
        raise ValueError(f"cannot draw {k} items from a population of {n}")
    pool = list(population)
    for i in range(k):
        j = int(rng.integers(i, n))
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:k]


def exponential_wait(rate: float, rng: np.random.Generator) -> float:
    """Waiting time until the next event of a Poisson process with this rate."""
    return float(rng.exponential(1.0 / rate))
