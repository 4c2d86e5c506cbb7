"""
Parameter estimation by maximum likelihood.
"""

from .mutation_rate import MutationRateOptimizer, estimate_mutation_rate

__all__ = [
    'MutationRateOptimizer',
    'estimate_mutation_rate',
]
