"""
Overlay of neutral mutations on an event history.
"""

from typing import Dict

from .base import Simulator, Seed
from ..core.events import EventHistory, EventKind, MutationEvent, replay
from ..core.sampling import exponential_wait
from ..params import check_mutation_rate


class MutationOverlay(Simulator):
    """
    Drop neutral mutations on the lineages of a fixed event history.

    The history is replayed forward from the root coalescence to the present.
    Between two consecutive events, mutations arrive as a Poisson process at
    rate ``mutation_rate * j`` where j is the number of active lineages, and
    each mutation falls on a uniformly chosen active lineage. The lineage of
    the ultimate ancestor above the root is not mutated.

    Parameters
    ----------
    history : EventHistory
        Mutation-free event history; it is not modified
    mutation_rate : float
        Per-lineage mutation rate (> 0)
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility

    Examples
    --------
    >>> from asglik.simulate.graph import simulate_graph
    >>> history = simulate_graph(4, 1.0, seed=3)
    >>> overlay = MutationOverlay(history, mutation_rate=0.5, seed=7)
    >>> annotated = overlay.simulate()
    >>> annotated.structural() == history
    True
    """

    def __init__(self, history: EventHistory, mutation_rate: float, seed: Seed = None):
        self.history = history.structural()
        self.mutation_rate = check_mutation_rate(mutation_rate)
        super().__init__(seed)

    def simulate(self) -> EventHistory:
        events = []
        previous_time = None
        for _, event, active in replay(self.history.with_present()):
            if previous_time is not None:
                events.extend(self._mutate_interval(previous_time, event.time, active))
            if event.kind is not EventKind.PRESENT:
                events.append(event)
            previous_time = event.time
        return EventHistory(tuple(events), self.history.n_samples)

    def _mutate_interval(self, start: float, end: float, active) -> list:
        """
        Mutations on the active lineages between two events.

        Parameters
        ----------
        start : float
            Time of the earlier event (before the present)
        end : float
            Time of the later event (before the present), ``end < start``
        active : frozenset of int
            Lineages active during the interval

        Returns
        -------
        list of MutationEvent
            Mutations ordered forward in time
        """
        lineages = sorted(active)
        rate = self.mutation_rate * len(lineages)
        mutations = []
        time = start
        while True:
            next_time = time - exponential_wait(rate, self.rng)
            # A zero or sub-resolution wait would repeat the previous time
            if next_time == time:
                continue
            if next_time <= end:
                return mutations
            time = next_time
            lineage = lineages[int(self.rng.integers(len(lineages)))]
            mutations.append(MutationEvent(time, lineage))

    def get_parameters(self) -> Dict:
        return {
            'model': 'two-state',
            'mutation_rate': self.mutation_rate,
            'n_samples': self.history.n_samples,
        }


def overlay_mutations(
    history: EventHistory,
    mutation_rate: float,
    seed: Seed = None
) -> EventHistory:
    """
    Overlay neutral mutations on an event history.

    Parameters
    ----------
    history : EventHistory
        Mutation-free event history
    mutation_rate : float
        Per-lineage mutation rate (> 0)
    seed : int or numpy.random.Generator, optional
        Random seed for reproducibility

    Returns
    -------
    EventHistory
        The structural events interleaved by time with mutation events
    """
    return MutationOverlay(history, mutation_rate, seed=seed).simulate()
