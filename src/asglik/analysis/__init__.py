"""
Validation tools for the exact likelihood.

This module provides the Monte-Carlo estimator of the sample likelihood
and the comparison of that estimate with the exact value.
"""

from .montecarlo import MonteCarloEstimate, empirical_likelihood, estimate_likelihood
from .results import MutationRateResult, ValidationResult
from .validation import validate_likelihood

__all__ = [
    "MonteCarloEstimate",
    "empirical_likelihood",
    "estimate_likelihood",
    "validate_likelihood",
    "ValidationResult",
    "MutationRateResult",
]
