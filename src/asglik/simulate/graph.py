"""
Simulation of the ancestral selection graph.
"""

import logging
from typing import Dict

from .base import Simulator, Seed
from ..core.events import BranchingEvent, CoalescenceEvent, EventHistory
from ..core.sampling import exponential_wait, sample_without_replacement
from ..params import check_sample_size, check_selection_strength

logger = logging.getLogger(__name__)


class GraphSimulator(Simulator):
    """
    Simulate event histories of the ancestral selection graph.

    Starting from ``n_samples`` lineages at the present, the dual process
    runs backward in time. With j active lineages, each pair coalesces at
    rate 1 (total j(j-1)/2) and each lineage branches at rate sigma/2
    (total sigma*j/2). A coalescence replaces two lineages by one fresh
    lineage; a branching event replaces one lineage by a continuing and an
    incoming branch. The process stops when a single lineage, the ultimate
    ancestor, remains.

    Parameters
    ----------
    n_samples : int
        Number of sampled lineages (> 1); they receive ids 1..n_samples
    sigma : float
        Selection strength (>= 0)
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility

    Examples
    --------
    >>> sim = GraphSimulator(n_samples=4, sigma=1.0, seed=42)
    >>> history = sim.simulate()
    >>> history.n_samples
    4
    >>> GraphSimulator(n_samples=5, sigma=0.0, seed=1).simulate().n_coalescences
    4
    """

    def __init__(self, n_samples: int, sigma: float, seed: Seed = None):
        self.n_samples = check_sample_size(n_samples)
        self.sigma = check_selection_strength(sigma)
        super().__init__(seed)

    def simulate(self) -> EventHistory:
        active = list(range(1, self.n_samples + 1))
        next_id = self.n_samples + 1
        time = 0.0
        events = []

        while len(active) > 1:
            j = len(active)
            coalescence_rate = j * (j - 1) / 2
            branching_rate = self.sigma * j / 2
            total_rate = coalescence_rate + branching_rate

            is_coalescence = self.rng.random() < coalescence_rate / total_rate
            time += exponential_wait(total_rate, self.rng)

            if is_coalescence:
                left, right = sample_without_replacement(active, 2, self.rng)
                active.remove(left)
                active.remove(right)
                active.append(next_id)
                events.append(CoalescenceEvent(time, next_id, left, right))
                next_id += 1
            else:
                (lineage,) = sample_without_replacement(active, 1, self.rng)
                active.remove(lineage)
                active.extend([next_id, next_id + 1])
                events.append(BranchingEvent(time, lineage, next_id, next_id + 1))
                next_id += 2

        # Built present-to-ancestor; histories run ancestor-to-present
        events.reverse()
        history = EventHistory(tuple(events), self.n_samples)
        logger.debug(
            "Simulated ASG with %d coalescences, %d branchings, root time %f",
            history.n_coalescences, history.n_branchings, history.root_time,
        )
        return history

    def get_parameters(self) -> Dict:
        return {
            'model': 'ASG',
            'n_samples': self.n_samples,
            'sigma': self.sigma,
        }


def simulate_graph(n_samples: int, sigma: float, seed: Seed = None) -> EventHistory:
    """
    Simulate one event history of the ancestral selection graph.

    Parameters
    ----------
    n_samples : int
        Number of sampled lineages (> 1)
    sigma : float
        Selection strength (>= 0); with sigma = 0 no branching occurs
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility

    Returns
    -------
    EventHistory
        Events ordered from the root coalescence to the most recent event
    """
    return GraphSimulator(n_samples, sigma, seed=seed).simulate()
