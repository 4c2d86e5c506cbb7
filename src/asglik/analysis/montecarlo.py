"""
Monte-Carlo estimation of the sample likelihood.

Repeatedly overlays mutations on a fixed history and projects the sample;
the fraction of replicates reproducing the observed sample estimates the
same probability :mod:`asglik.core.likelihood` computes exactly.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from scipy.stats import norm

from ..core.events import EventHistory
from ..exceptions import InvalidParameterError
from ..params import check_ancestor_type, check_observed, check_trials
from ..simulate.base import Seed
from ..simulate.mutations import MutationOverlay
from ..simulate.projection import project_sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloEstimate:
    """
    Monte-Carlo estimate of a sample probability.

    Attributes
    ----------
    matches : int
        Number of replicates that reproduced the observed sample
    trials : int
        Number of replicates
    """

    matches: int
    trials: int

    @property
    def estimate(self) -> float:
        """Fraction of matching replicates."""
        return self.matches / self.trials

    @property
    def std_error(self) -> float:
        """Binomial standard error of :attr:`estimate`."""
        p = self.estimate
        return float(np.sqrt(p * (1 - p) / self.trials))

    def confidence_interval(self, level: float = 0.95) -> Tuple[float, float]:
        """
        Normal-approximation confidence interval, clipped to [0, 1].

        Parameters
        ----------
        level : float, default=0.95
            Confidence level in (0, 1)
        """
        if not 0 < level < 1:
            raise InvalidParameterError(f"level must be in (0, 1), got {level}")
        half_width = norm.ppf(0.5 + level / 2) * self.std_error
        return max(0.0, self.estimate - half_width), min(1.0, self.estimate + half_width)


def estimate_likelihood(
    observed: Sequence[int],
    history: EventHistory,
    mutation_rate: float,
    ancestor_type: int,
    trials: int,
    seed: Seed = None
) -> MonteCarloEstimate:
    """
    Estimate the probability of an observed sample by simulation.

    Each trial overlays fresh mutations on ``history`` and projects the
    sample from the ancestor; a trial matches when every sampled type equals
    the observed one.

    Parameters
    ----------
    observed : sequence of int
        Sample types (0 or 1), ordered by sample id 1..N
    history : EventHistory
        Mutation-free event history, shared by all trials
    mutation_rate : float
        Per-lineage mutation rate (> 0)
    ancestor_type : int
        Type of the ultimate ancestor (0 or 1)
    trials : int
        Number of replicates (> 0)
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility

    Returns
    -------
    MonteCarloEstimate
        Match count and derived statistics
    """
    observed = check_observed(observed, history.n_samples)
    ancestor_type = check_ancestor_type(ancestor_type)
    trials = check_trials(trials)
    overlay = MutationOverlay(history, mutation_rate, seed=seed)

    logger.info("Running %d Monte-Carlo trials", trials)
    matches = 0
    for _ in range(trials):
        sample = project_sample(overlay.simulate(), ancestor_type)
        if np.array_equal(sample, observed):
            matches += 1
    logger.debug("%d of %d trials matched the observed sample", matches, trials)

    return MonteCarloEstimate(matches=matches, trials=trials)


def empirical_likelihood(
    observed: Sequence[int],
    history: EventHistory,
    mutation_rate: float,
    ancestor_type: int,
    trials: int,
    seed: Seed = None
) -> float:
    """
    Fraction of simulated samples equal to the observed sample.

    Converges to :func:`asglik.core.likelihood.likelihood` as ``trials``
    grows. See :func:`estimate_likelihood` for the parameters.
    """
    return estimate_likelihood(
        observed, history, mutation_rate, ancestor_type, trials, seed=seed
    ).estimate
