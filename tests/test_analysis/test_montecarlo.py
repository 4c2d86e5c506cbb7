"""
Tests for the Monte-Carlo likelihood estimator.
"""

import numpy as np
import pytest

from asglik.analysis.montecarlo import (
    MonteCarloEstimate,
    empirical_likelihood,
    estimate_likelihood,
)
from asglik.core.likelihood import likelihood
from asglik.exceptions import InvalidParameterError
from asglik.simulate.graph import simulate_graph


class TestMonteCarloEstimate:
    """Test the estimate container."""

    def test_statistics(self):
        est = MonteCarloEstimate(matches=250, trials=1000)
        assert est.estimate == 0.25
        assert np.isclose(est.std_error, np.sqrt(0.25 * 0.75 / 1000))

    def test_confidence_interval(self):
        est = MonteCarloEstimate(matches=250, trials=1000)
        low, high = est.confidence_interval()
        assert low < 0.25 < high
        assert np.isclose(high - 0.25, 1.959964 * est.std_error, rtol=1e-5)
        narrow = est.confidence_interval(level=0.5)
        assert narrow[0] > low and narrow[1] < high

    def test_interval_clipped(self):
        assert MonteCarloEstimate(0, 100).confidence_interval() == (0.0, 0.0)
        low, high = MonteCarloEstimate(99, 100).confidence_interval()
        assert high == 1.0
        assert low < 0.99

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5])
    def test_invalid_level(self, level):
        with pytest.raises(InvalidParameterError, match="level"):
            MonteCarloEstimate(5, 10).confidence_interval(level)


class TestEstimateLikelihood:
    """Test estimation by repeated simulation."""

    def test_agrees_with_exact(self, four_sample_history):
        observed = [1, 1, 1, 1]
        exact = likelihood(observed, four_sample_history, 0.5, 1)
        est = estimate_likelihood(
            observed, four_sample_history, 0.5, 1, trials=10_000, seed=2024
        )
        assert est.trials == 10_000
        assert abs(est.estimate - exact) < 0.02

    def test_agrees_with_exact_branching(self, branching_pair_history):
        """Exercises the type-1 dominance rule at the branching event."""
        for observed, ancestor_type in (([1, 0], 0), ([0, 1], 0), ([0, 0], 1)):
            exact = likelihood(observed, branching_pair_history, 0.5, ancestor_type)
            est = empirical_likelihood(
                observed, branching_pair_history, 0.5, ancestor_type,
                trials=5000, seed=7
            )
            assert abs(est - exact) < 0.03

    @pytest.mark.slow
    def test_agrees_with_exact_simulated(self):
        for seed in range(3):
            history = simulate_graph(4, 1.0, seed=seed)
            if history.n_internal > 16:
                continue
            exact = likelihood([1, 0, 1, 1], history, 0.8, 1)
            est = empirical_likelihood(
                [1, 0, 1, 1], history, 0.8, 1, trials=10_000, seed=seed
            )
            assert abs(est - exact) < 0.02

    def test_reproducibility(self, four_sample_history):
        a = estimate_likelihood([1, 0, 1, 1], four_sample_history, 1.0, 1, 500, seed=3)
        b = estimate_likelihood([1, 0, 1, 1], four_sample_history, 1.0, 1, 500, seed=3)
        assert a == b

    def test_empirical_is_fraction(self, pair_history):
        value = empirical_likelihood([1, 0], pair_history, 1.0, 1, trials=200, seed=1)
        assert 0.0 <= value <= 1.0
        assert value * 200 == int(round(value * 200))

    def test_no_mutation_limit(self, four_sample_history):
        """At a tiny rate every replicate copies the ancestor."""
        est = estimate_likelihood(
            [0, 0, 0, 0], four_sample_history, 1e-12, 0, trials=100, seed=1
        )
        assert est.matches == 100

    @pytest.mark.parametrize("trials", [0, -10])
    def test_invalid_trials(self, pair_history, trials):
        with pytest.raises(InvalidParameterError, match="trials"):
            estimate_likelihood([1, 1], pair_history, 0.5, 1, trials)

    def test_invalid_observed(self, pair_history):
        with pytest.raises(InvalidParameterError, match="length 2"):
            estimate_likelihood([1, 1, 0], pair_history, 0.5, 1, 10)

    def test_invalid_ancestor_type(self, pair_history):
        with pytest.raises(InvalidParameterError, match="ancestor_type"):
            estimate_likelihood([1, 1], pair_history, 0.5, 3, 10)
