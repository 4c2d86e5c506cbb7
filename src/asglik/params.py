"""
Model parameters and their validation.

Every public operation validates its scalar inputs with the checks in this
module before doing any work, so a bad value fails fast with an
:class:`~asglik.exceptions.InvalidParameterError`.
"""

import numbers
from dataclasses import dataclass, asdict
from typing import Any, Dict

import numpy as np

from .exceptions import InvalidParameterError


def check_sample_size(n_samples) -> int:
    """Sample size must be an integer greater than 1."""
    if isinstance(n_samples, bool) or not isinstance(n_samples, numbers.Integral):
        raise InvalidParameterError(
            f"n_samples must be an integer, got {n_samples!r}"
        )
    if n_samples <= 1:
        raise InvalidParameterError(f"n_samples must be > 1, got {n_samples}")
    return int(n_samples)


def check_selection_strength(sigma) -> float:
    """Selection strength must be a finite real >= 0."""
    if isinstance(sigma, bool) or not isinstance(sigma, numbers.Real):
        raise InvalidParameterError(f"sigma must be a real number, got {sigma!r}")
    if not np.isfinite(sigma) or sigma < 0:
        raise InvalidParameterError(f"sigma must be >= 0, got {sigma}")
    return float(sigma)


def check_mutation_rate(mutation_rate) -> float:
    """Mutation rate must be a finite real > 0."""
    if isinstance(mutation_rate, bool) or not isinstance(mutation_rate, numbers.Real):
        raise InvalidParameterError(
            f"mutation_rate must be a real number, got {mutation_rate!r}"
        )
    if not np.isfinite(mutation_rate) or mutation_rate <= 0:
        raise InvalidParameterError(
            f"mutation_rate must be > 0, got {mutation_rate}"
        )
    return float(mutation_rate)


def check_ancestor_type(ancestor_type) -> int:
    if isinstance(ancestor_type, bool) or ancestor_type not in (0, 1):
        raise InvalidParameterError(
            f"ancestor_type must be 0 or 1, got {ancestor_type!r}"
        )
    return int(ancestor_type)


def check_trials(trials) -> int:
    if isinstance(trials, bool) or not isinstance(trials, numbers.Integral):
        raise InvalidParameterError(f"trials must be an integer, got {trials!r}")
    if trials <= 0:
        raise InvalidParameterError(f"trials must be > 0, got {trials}")
    return int(trials)


def check_observed(observed, n_samples: int) -> np.ndarray:
    """
    Convert an observed sample to a uint8 array and validate it.

    Parameters
    ----------
    observed : sequence of int
        Sample types ordered by sample id 1..N
    n_samples : int
        Expected number of samples

    Returns
    -------
    np.ndarray, shape (n_samples,), dtype=uint8
        The observed types
    """
    values = np.asarray(observed)
    if values.ndim != 1 or len(values) != n_samples:
        raise InvalidParameterError(
            f"observed sample must have length {n_samples}, got shape {values.shape}"
        )
    if not np.all((values == 0) | (values == 1)):
        raise InvalidParameterError(
            f"observed types must be 0 or 1, got {values.tolist()}"
        )
    return values.astype(np.uint8)


@dataclass(frozen=True)
class ModelParameters:
    """
    Parameters of the selection model.

    Attributes
    ----------
    n_samples : int
        Number of sampled individuals (N > 1)
    sigma : float
        Selection strength (>= 0); zero gives the neutral coalescent
    mutation_rate : float
        Per-lineage rate of the symmetric two-state mutation process (> 0)
    ancestor_type : int
        Type of the ultimate ancestor (0 or 1)
    """

    n_samples: int
    sigma: float
    mutation_rate: float
    ancestor_type: int = 1

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "n_samples", check_sample_size(self.n_samples))
        object.__setattr__(self, "sigma", check_selection_strength(self.sigma))
        object.__setattr__(
            self, "mutation_rate", check_mutation_rate(self.mutation_rate)
        )
        object.__setattr__(
            self, "ancestor_type", check_ancestor_type(self.ancestor_type)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Parameters as a JSON-serializable dictionary."""
        return asdict(self)
