"""
Cross-check of the exact likelihood against simulation.
"""

import warnings
from typing import Sequence

from .montecarlo import estimate_likelihood
from .results import ValidationResult
from ..core.events import EventHistory
from ..core.likelihood import ExactLikelihood, MAX_INTERNAL_LINEAGES
from ..params import check_ancestor_type, check_observed, check_trials
from ..simulate.base import Seed


def validate_likelihood(
    observed: Sequence[int],
    history: EventHistory,
    mutation_rate: float,
    ancestor_type: int,
    trials: int = 10_000,
    seed: Seed = None,
    tolerance: float = 0.02,
    max_internal: int = MAX_INTERNAL_LINEAGES
) -> ValidationResult:
    """
    Compare the exact likelihood with its Monte-Carlo estimate.

    Both quantities are the probability of ``observed`` given ``history``,
    so they must agree up to sampling error.

    Parameters
    ----------
    observed : sequence of int
        Sample types (0 or 1), ordered by sample id 1..N
    history : EventHistory
        Mutation-free event history
    mutation_rate : float
        Per-lineage mutation rate (> 0)
    ancestor_type : int
        Type of the ultimate ancestor (0 or 1)
    trials : int, default=10000
        Number of Monte-Carlo replicates
    seed : int or numpy.random.Generator, optional
        Random seed for the Monte-Carlo replicates
    tolerance : float, default=0.02
        Largest absolute difference accepted as agreement
    max_internal : int
        Enumeration limit passed to :class:`ExactLikelihood`

    Returns
    -------
    ValidationResult
        Exact value, estimate and agreement statistics

    Warns
    -----
    UserWarning
        If the two values differ by more than ``tolerance``
    """
    observed = check_observed(observed, history.n_samples)
    ancestor_type = check_ancestor_type(ancestor_type)
    trials = check_trials(trials)
    calc = ExactLikelihood(history, mutation_rate, max_internal=max_internal)
    exact = calc.likelihood(observed, ancestor_type)
    mc = estimate_likelihood(
        observed, history, mutation_rate, ancestor_type, trials, seed=seed
    )

    result = ValidationResult(
        exact=exact,
        estimate=mc.estimate,
        std_error=mc.std_error,
        trials=mc.trials,
        tolerance=tolerance,
        params={
            'mutation_rate': calc.mutation_rate,
            'ancestor_type': int(ancestor_type),
            'n_samples': history.n_samples,
            'n_internal': history.n_internal,
            'n_branchings': history.n_branchings,
        },
    )
    if not result.agrees:
        warnings.warn(
            f"Exact likelihood {exact:.6f} and Monte-Carlo estimate "
            f"{mc.estimate:.6f} differ by more than {tolerance}. "
            "Increase the number of trials or check the history.",
            UserWarning
        )
    return result
