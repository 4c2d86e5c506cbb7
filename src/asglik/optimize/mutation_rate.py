"""
Maximum likelihood estimation of the mutation rate.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import minimize_scalar

from ..analysis.results import MutationRateResult
from ..core.events import EventHistory
from ..core.likelihood import ExactLikelihood, MAX_INTERNAL_LINEAGES
from ..exceptions import InvalidParameterError
from ..params import check_ancestor_type, check_observed

logger = logging.getLogger(__name__)


class MutationRateOptimizer:
    """
    Estimate the mutation rate of a sample with a fixed event history.

    The exact likelihood is maximised over log(u) with a bounded scalar
    search. The lineage structure of the history is computed once and
    reused for every evaluation.

    Parameters
    ----------
    observed : sequence of int
        Sample types (0 or 1), ordered by sample id 1..N
    history : EventHistory
        Mutation-free event history
    ancestor_type : int, optional
        Condition on this ancestor type; if None, the ancestor type is
        averaged over with stationary weights
    max_internal : int
        Enumeration limit passed to :class:`ExactLikelihood`
    """

    def __init__(
        self,
        observed: Sequence[int],
        history: EventHistory,
        ancestor_type: Optional[int] = None,
        max_internal: int = MAX_INTERNAL_LINEAGES
    ):
        self.observed = check_observed(observed, history.n_samples)
        self.history = history
        self.ancestor_type = (
            None if ancestor_type is None else check_ancestor_type(ancestor_type)
        )
        # Any positive rate works here; it is replaced on every evaluation
        self.calc = ExactLikelihood(history, 1.0, max_internal=max_internal)

        # Store optimization history
        self.history_lnL = []

    def compute_log_likelihood(self, mutation_rate: float) -> float:
        """
        Log-likelihood of the observed sample at a given mutation rate.

        Parameters
        ----------
        mutation_rate : float
            Mutation rate (> 0)

        Returns
        -------
        float
            Log-likelihood (``-inf`` if the sample is impossible)
        """
        self.calc.set_mutation_rate(mutation_rate)
        u = self.calc.mutation_rate
        if self.ancestor_type is None:
            value = self.calc.full_likelihood(self.observed)
        else:
            value = self.calc.likelihood(self.observed, self.ancestor_type)
        lnL = np.log(value) if value > 0 else float("-inf")
        self.history_lnL.append((u, lnL))
        return float(lnL)

    def optimize(
        self,
        bounds: Tuple[float, float] = (1e-4, 1e2),
        maxiter: int = 200
    ) -> MutationRateResult:
        """
        Maximise the likelihood over the mutation rate.

        Parameters
        ----------
        bounds : tuple of float
            Lower and upper bound on the mutation rate
        maxiter : int
            Maximum number of iterations

        Returns
        -------
        MutationRateResult
            Estimated rate and log-likelihood
        """
        low, high = bounds
        if not 0 < low < high:
            raise InvalidParameterError(
                f"bounds must satisfy 0 < low < high, got {bounds}"
            )

        def objective(log_u):
            lnL = self.compute_log_likelihood(float(np.exp(log_u)))
            # Bounded search needs a finite objective
            return -lnL if np.isfinite(lnL) else 1e10

        self.history_lnL = []
        logger.info("Optimizing mutation rate in [%g, %g]", low, high)
        result = minimize_scalar(
            objective,
            bounds=(np.log(low), np.log(high)),
            method='bounded',
            options={'maxiter': maxiter}
        )
        opt_u = float(np.exp(result.x))
        opt_lnL = self.compute_log_likelihood(opt_u)
        logger.info("Mutation rate estimate %f, lnL %f", opt_u, opt_lnL)

        return MutationRateResult(
            mutation_rate=opt_u,
            lnL=opt_lnL,
            ancestor_type=self.ancestor_type,
            success=bool(result.success),
            n_evaluations=int(result.nfev),
        )


def estimate_mutation_rate(
    observed: Sequence[int],
    history: EventHistory,
    ancestor_type: Optional[int] = None,
    bounds: Tuple[float, float] = (1e-4, 1e2),
    maxiter: int = 200,
    max_internal: int = MAX_INTERNAL_LINEAGES
) -> MutationRateResult:
    """
    Maximum likelihood estimate of the mutation rate.

    See :class:`MutationRateOptimizer` for the parameters.
    """
    optimizer = MutationRateOptimizer(
        observed, history, ancestor_type=ancestor_type, max_internal=max_internal
    )
    return optimizer.optimize(bounds=bounds, maxiter=maxiter)
