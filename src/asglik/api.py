"""
High-level API for asglik.

Chains the simulators into a single call that produces a genealogy, its
mutations and the resulting sample, and exposes the likelihood of that
sample.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np

from .core.events import EventHistory
from .core.likelihood import ExactLikelihood, MAX_INTERNAL_LINEAGES
from .params import ModelParameters
from .simulate.base import Seed
from .simulate.graph import GraphSimulator
from .simulate.mutations import MutationOverlay
from .simulate.projection import project_sample


@dataclass
class SimulatedSample:
    """
    A sample simulated under the selection model.

    Attributes
    ----------
    params : ModelParameters
        Parameters the sample was simulated with
    history : EventHistory
        Mutation-free event history of the ancestral selection graph
    annotated : EventHistory
        The same history with mutation events
    sample : np.ndarray
        Sampled types ordered by sample id 1..N
    """

    params: ModelParameters
    history: EventHistory
    annotated: EventHistory
    sample: np.ndarray

    def likelihood(
        self,
        observed: Optional[Sequence[int]] = None,
        max_internal: int = MAX_INTERNAL_LINEAGES
    ) -> float:
        """
        Exact probability of a sample given the simulated history and the
        ancestor type.

        Parameters
        ----------
        observed : sequence of int, optional
            Sample to evaluate; defaults to the simulated sample
        max_internal : int
            Enumeration limit passed to :class:`ExactLikelihood`
        """
        calc = ExactLikelihood(
            self.history, self.params.mutation_rate, max_internal=max_internal
        )
        if observed is None:
            observed = self.sample
        return calc.likelihood(observed, self.params.ancestor_type)

    def full_likelihood(
        self,
        observed: Optional[Sequence[int]] = None,
        max_internal: int = MAX_INTERNAL_LINEAGES
    ) -> float:
        """Like :meth:`likelihood`, averaging over the ancestor type."""
        calc = ExactLikelihood(
            self.history, self.params.mutation_rate, max_internal=max_internal
        )
        if observed is None:
            observed = self.sample
        return calc.full_likelihood(observed)

    def to_dict(self) -> Dict[str, Any]:
        """
        Summary as a JSON-serializable dictionary.

        The event histories themselves are not included.
        """
        return {
            'params': self.params.to_dict(),
            'sample': self.sample.tolist(),
            'n_internal': self.history.n_internal,
            'n_coalescences': self.history.n_coalescences,
            'n_branchings': self.history.n_branchings,
            'n_mutations': self.annotated.n_mutations,
            'root_time': float(self.history.root_time),
        }


def simulate_sample(
    n_samples: int,
    sigma: float,
    mutation_rate: float,
    ancestor_type: int = 1,
    seed: Seed = None
) -> SimulatedSample:
    """
    Simulate a genealogy with selection, its mutations and the sample.

    Parameters
    ----------
    n_samples : int
        Number of sampled individuals (> 1)
    sigma : float
        Selection strength (>= 0)
    mutation_rate : float
        Per-lineage mutation rate (> 0)
    ancestor_type : int, default=1
        Type of the ultimate ancestor (0 or 1)
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility

    Returns
    -------
    SimulatedSample
        The history, the annotated history and the sampled types

    Examples
    --------
    >>> from asglik import simulate_sample
    >>> result = simulate_sample(4, sigma=1.0, mutation_rate=0.5, seed=42)
    >>> len(result.sample)
    4
    >>> 0.0 < result.likelihood() <= 1.0
    True
    """
    params = ModelParameters(n_samples, sigma, mutation_rate, ancestor_type)
    rng = np.random.default_rng(seed)

    history = GraphSimulator(params.n_samples, params.sigma, seed=rng).simulate()
    annotated = MutationOverlay(history, params.mutation_rate, seed=rng).simulate()
    sample = project_sample(annotated, params.ancestor_type)

    return SimulatedSample(
        params=params, history=history, annotated=annotated, sample=sample
    )
