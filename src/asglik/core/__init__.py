"""
Core data structures and algorithms.

This module provides:

- **Event histories**: the tagged event types and the immutable history
- **Mutation model**: the two-state rate matrix and its transition probabilities
- **Exact likelihood**: enumeration over the types of internal lineages
"""

from asglik.core.events import (
    BranchingEvent,
    CoalescenceEvent,
    EventHistory,
    EventKind,
    MutationEvent,
    PresentEvent,
    replay,
)
from asglik.core.likelihood import (
    MAX_INTERNAL_LINEAGES,
    ExactLikelihood,
    full_likelihood,
    likelihood,
    log_likelihood,
)
from asglik.core.matrix import (
    rate_matrix,
    stationary_distribution,
    transition_matrix,
    transition_probabilities,
)

__all__ = [
    "BranchingEvent",
    "CoalescenceEvent",
    "EventHistory",
    "EventKind",
    "MutationEvent",
    "PresentEvent",
    "replay",
    "MAX_INTERNAL_LINEAGES",
    "ExactLikelihood",
    "likelihood",
    "log_likelihood",
    "full_likelihood",
    "rate_matrix",
    "stationary_distribution",
    "transition_matrix",
    "transition_probabilities",
]
