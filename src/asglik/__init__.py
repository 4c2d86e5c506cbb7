"""
asglik: exact likelihoods under the ancestral selection graph.

Simulates genealogies with selection (the ancestral selection graph),
overlays neutral two-state mutations, derives the sampled types, and computes
the exact probability of an observed sample by summing over the unobserved
types of internal lineages. A Monte-Carlo estimator of the same probability
serves as an independent check.

Quick Start
-----------
Simulate a sample and compute its likelihood:

>>> from asglik import simulate_sample
>>> result = simulate_sample(4, sigma=1.0, mutation_rate=0.5, seed=42)
>>> print(result.sample)
>>> print(result.likelihood())

Check the exact likelihood against simulation:

>>> from asglik import simulate_graph, validate_likelihood
>>> history = simulate_graph(4, sigma=1.0, seed=1)
>>> check = validate_likelihood([1, 1, 1, 0], history, 0.5, 1, trials=10000, seed=2)
>>> print(check.summary())
"""

__version__ = "0.1.0"

# High-level API
from .api import simulate_sample, SimulatedSample
from .params import ModelParameters

# Simulation
from .simulate import (
    GraphSimulator,
    MutationOverlay,
    simulate_graph,
    overlay_mutations,
    project_sample,
)

# Event histories
from .core.events import (
    EventHistory,
    EventKind,
    CoalescenceEvent,
    BranchingEvent,
    MutationEvent,
    PresentEvent,
)

# Likelihood
from .core.likelihood import (
    ExactLikelihood,
    likelihood,
    log_likelihood,
    full_likelihood,
    MAX_INTERNAL_LINEAGES,
)

# Validation and estimation
from .analysis import (
    empirical_likelihood,
    estimate_likelihood,
    validate_likelihood,
    MonteCarloEstimate,
    ValidationResult,
    MutationRateResult,
)
from .optimize import estimate_mutation_rate, MutationRateOptimizer

from .exceptions import (
    AsglikError,
    InvalidParameterError,
    EnumerationTooLargeError,
    InconsistentHistoryError,
)

__all__ = [
    # Simple API - Start here!
    "simulate_sample",
    "SimulatedSample",
    "ModelParameters",

    # Simulation
    "GraphSimulator",
    "MutationOverlay",
    "simulate_graph",
    "overlay_mutations",
    "project_sample",

    # Event histories
    "EventHistory",
    "EventKind",
    "CoalescenceEvent",
    "BranchingEvent",
    "MutationEvent",
    "PresentEvent",

    # Likelihood
    "ExactLikelihood",
    "likelihood",
    "log_likelihood",
    "full_likelihood",
    "MAX_INTERNAL_LINEAGES",

    # Validation and estimation
    "empirical_likelihood",
    "estimate_likelihood",
    "validate_likelihood",
    "MonteCarloEstimate",
    "ValidationResult",
    "MutationRateResult",
    "estimate_mutation_rate",
    "MutationRateOptimizer",

    # Errors
    "AsglikError",
    "InvalidParameterError",
    "EnumerationTooLargeError",
    "InconsistentHistoryError",

    # Version
    "__version__",
]
