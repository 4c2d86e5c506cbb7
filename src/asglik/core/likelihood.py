"""
Exact likelihood of a sample given an ancestral selection graph.

Conditional on the type carried by every lineage of the graph, the
probability of the sample factorises over lineages: each lineage either
undergoes an even number of mutations (it keeps the type it inherited) or an
odd number (it carries the other type). The exact likelihood sums this
product over all 2^m type assignments of the m internal lineages, the sample
types and the ancestor type being fixed.

Lineage types are inherited forward in time:

- the two lineages below a coalescence inherit the parent's type;
- the lineage below a branching event inherits
  ``type(continuing) OR type(incoming)``, since selection favours type 1.
"""

import logging
import math
import numbers
from typing import Optional, Sequence

import numpy as np

from .events import EventHistory, EventKind, replay
from .matrix import rate_matrix, stationary_distribution, transition_probabilities
from ..exceptions import (
    EnumerationTooLargeError,
    InconsistentHistoryError,
    InvalidParameterError,
)
from ..params import check_ancestor_type, check_mutation_rate, check_observed

logger = logging.getLogger(__name__)

# Default number of internal lineages the calculator agrees to enumerate.
MAX_INTERNAL_LINEAGES = 24

# Assignments are indexed by int64 bit patterns; this is a hard ceiling.
INDEX_BITS = 62

DEFAULT_CHUNK_SIZE = 1 << 16


class ExactLikelihood:
    """
    Exact likelihood calculator for a fixed event history.

    The lineage structure of the history (branch lengths and the lineages
    each type is inherited from) is computed once at construction; the
    calculator can then evaluate any observed sample and ancestor type.

    Parameters
    ----------
    history : EventHistory
        Event history; mutation events, if any, are ignored
    mutation_rate : float
        Per-lineage rate of the two-state mutation process (> 0)
    max_internal : int, default=MAX_INTERNAL_LINEAGES
        Largest number of internal lineages to enumerate (at most
        ``INDEX_BITS``)
    chunk_size : int, default=65536
        Number of type assignments evaluated per vectorised block

    Raises
    ------
    EnumerationTooLargeError
        If the history has more than ``max_internal`` internal lineages. No
        enumeration is attempted.
    InconsistentHistoryError
        If the history is malformed

    Examples
    --------
    >>> from asglik.simulate import simulate_graph
    >>> history = simulate_graph(4, 0.5, seed=1)
    >>> calc = ExactLikelihood(history, mutation_rate=0.5)
    >>> p = calc.likelihood([1, 1, 0, 1], ancestor_type=1)
    >>> 0.0 <= p <= 1.0
    True
    """

    def __init__(
        self,
        history: EventHistory,
        mutation_rate: float,
        max_internal: int = MAX_INTERNAL_LINEAGES,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        if (
            isinstance(max_internal, bool)
            or not isinstance(max_internal, numbers.Integral)
            or not 0 <= max_internal <= INDEX_BITS
        ):
            raise InvalidParameterError(
                f"max_internal must be an integer in [0, {INDEX_BITS}], "
                f"got {max_internal!r}"
            )
        if chunk_size < 1:
            raise InvalidParameterError(f"chunk_size must be >= 1, got {chunk_size}")

        self.mutation_rate = check_mutation_rate(mutation_rate)
        self.history = history.structural()
        self.max_internal = int(max_internal)
        self.chunk_size = int(chunk_size)
        self.n_samples = self.history.n_samples
        self.n_internal = self.history.n_internal

        if self.n_internal > self.max_internal:
            raise EnumerationTooLargeError(self.n_internal, self.max_internal)

        self._compute_lineage_structure()
        self.set_mutation_rate(self.mutation_rate)

    def _compute_lineage_structure(self):
        """
        Replay the history once to find every lineage's branch length and
        the lineages its inherited type comes from.

        Lineage ``i`` lives in column ``i - 1`` of the arrays. The ultimate
        ancestor is excluded, so each array has ``ancestor - 1`` entries.
        """
        n_lineages = self.history.ancestor - 1
        start = np.full(n_lineages, np.nan)
        end = np.zeros(n_lineages)
        source_a = np.full(n_lineages, -1, dtype=np.intp)
        source_b = np.full(n_lineages, -1, dtype=np.intp)

        final_active = frozenset()
        for _, event, active in replay(self.history.with_present()):
            if event.kind is EventKind.PRESENT:
                final_active = active
            elif event.kind is EventKind.COALESCENCE:
                for child in event.starts:
                    start[child - 1] = event.time
                    source_a[child - 1] = event.parent - 1
                    source_b[child - 1] = event.parent - 1
            elif event.kind is EventKind.BRANCHING:
                start[event.lineage - 1] = event.time
                source_a[event.lineage - 1] = event.continuing - 1
                source_b[event.lineage - 1] = event.incoming - 1
            for lineage in event.ends:
                if lineage != self.history.ancestor:
                    end[lineage - 1] = event.time

        samples = frozenset(range(1, self.n_samples + 1))
        if final_active != samples:
            raise InconsistentHistoryError(
                f"replay ends with lineages {sorted(final_active)}, expected "
                f"the samples 1..{self.n_samples}",
                index=len(self.history),
            )
        missing = np.flatnonzero(np.isnan(start))
        if len(missing):
            raise InconsistentHistoryError(
                f"lineage ids {(missing + 1).tolist()} never appear in the history"
            )

        self.branch_lengths = start - end
        self.source_a = source_a
        self.source_b = source_b

    def set_mutation_rate(self, mutation_rate: float):
        """Change the mutation rate, keeping the lineage structure."""
        self.mutation_rate = check_mutation_rate(mutation_rate)
        self.p_same, self.p_diff = transition_probabilities(
            self.mutation_rate, self.branch_lengths
        )

    @property
    def internal_lineages(self) -> range:
        """Identifiers of the internal lineages whose types are enumerated."""
        return range(self.n_samples + 1, self.n_samples + self.n_internal + 1)

    def branch_length(self, lineage: int) -> float:
        """Time during which ``lineage`` is active."""
        if not 1 <= lineage < self.history.ancestor:
            raise InvalidParameterError(
                f"lineage must be in 1..{self.history.ancestor - 1}, got {lineage}"
            )
        return float(self.branch_lengths[lineage - 1])

    def likelihood(self, observed: Sequence[int], ancestor_type: int) -> float:
        """
        Probability of the observed sample given the ancestor type.

        Parameters
        ----------
        observed : sequence of int
            Sample types (0 or 1), ordered by sample id 1..N
        ancestor_type : int
            Type of the ultimate ancestor (0 or 1)

        Returns
        -------
        float
            Probability in [0, 1]
        """
        observed = check_observed(observed, self.n_samples)
        ancestor_type = check_ancestor_type(ancestor_type)

        n, m = self.n_samples, self.n_internal
        n_assignments = 1 << m
        logger.debug(
            "Enumerating %d internal type assignments over %d lineages",
            n_assignments, len(self.branch_lengths),
        )

        shifts = np.arange(m, dtype=np.int64)
        width = self.history.ancestor
        partial_sums = []
        for first in range(0, n_assignments, self.chunk_size):
            index = np.arange(
                first, min(first + self.chunk_size, n_assignments), dtype=np.int64
            )
            types = np.empty((len(index), width), dtype=np.uint8)
            types[:, :n] = observed
            types[:, n:n + m] = (index[:, np.newaxis] >> shifts) & 1
            types[:, -1] = ancestor_type

            inherited = types[:, self.source_a] | types[:, self.source_b]
            factors = np.where(types[:, :-1] == inherited, self.p_same, self.p_diff)
            partial_sums.append(float(np.prod(factors, axis=1).sum()))

        return min(math.fsum(partial_sums), 1.0)

    def log_likelihood(self, observed: Sequence[int], ancestor_type: int) -> float:
        """
        Natural log of :meth:`likelihood`; ``-inf`` for an impossible sample.
        """
        value = self.likelihood(observed, ancestor_type)
        if value > 0:
            return math.log(value)
        return float("-inf")

    def full_likelihood(
        self,
        observed: Sequence[int],
        ancestor_weights: Optional[Sequence[float]] = None
    ) -> float:
        """
        Probability of the observed sample averaged over the ancestor type.

        Parameters
        ----------
        observed : sequence of int
            Sample types (0 or 1), ordered by sample id 1..N
        ancestor_weights : sequence of float, optional
            Probabilities of ancestor types 0 and 1. Defaults to the
            stationary distribution of the mutation process.

        Returns
        -------
        float
            Probability in [0, 1]
        """
        if ancestor_weights is None:
            weights = stationary_distribution(rate_matrix(self.mutation_rate))
        else:
            weights = np.asarray(ancestor_weights, dtype=float)
            if (
                weights.shape != (2,)
                or np.any(weights < 0)
                or not np.isclose(weights.sum(), 1.0)
            ):
                raise InvalidParameterError(
                    "ancestor_weights must be two non-negative probabilities "
                    f"summing to 1, got {weights.tolist()}"
                )
        return math.fsum(
            weight * self.likelihood(observed, ancestor_type)
            for ancestor_type, weight in enumerate(weights)
            if weight > 0
        )


def likelihood(
    observed: Sequence[int],
    history: EventHistory,
    mutation_rate: float,
    ancestor_type: int,
    max_internal: int = MAX_INTERNAL_LINEAGES
) -> float:
    """
    Exact probability of an observed sample under the selection model.

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
    max_internal : int, default=MAX_INTERNAL_LINEAGES
        Largest number of internal lineages to enumerate

    Returns
    -------
    float
        Probability in [0, 1]

    Raises
    ------
    EnumerationTooLargeError
        If the history has more than ``max_internal`` internal lineages
    """
    observed = check_observed(observed, history.n_samples)
    ancestor_type = check_ancestor_type(ancestor_type)
    calc = ExactLikelihood(history, mutation_rate, max_internal=max_internal)
    return calc.likelihood(observed, ancestor_type)


def log_likelihood(
    observed: Sequence[int],
    history: EventHistory,
    mutation_rate: float,
    ancestor_type: int,
    max_internal: int = MAX_INTERNAL_LINEAGES
) -> float:
    """Natural log of :func:`likelihood`."""
    observed = check_observed(observed, history.n_samples)
    ancestor_type = check_ancestor_type(ancestor_type)
    calc = ExactLikelihood(history, mutation_rate, max_internal=max_internal)
    return calc.log_likelihood(observed, ancestor_type)


def full_likelihood(
    observed: Sequence[int],
    history: EventHistory,
    mutation_rate: float,
    ancestor_weights: Optional[Sequence[float]] = None,
    max_internal: int = MAX_INTERNAL_LINEAGES
) -> float:
    """
    Probability of an observed sample with the ancestor type integrated out.

    The ancestor type is weighted by ``ancestor_weights``, by default the
    stationary distribution of the mutation process.
    """
    observed = check_observed(observed, history.n_samples)
    calc = ExactLikelihood(history, mutation_rate, max_internal=max_internal)
    return calc.full_likelihood(observed, ancestor_weights)
