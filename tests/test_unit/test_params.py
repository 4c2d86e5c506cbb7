"""
Tests for parameter validation.
"""

import dataclasses

import numpy as np
import pytest

from asglik.exceptions import InvalidParameterError
from asglik.params import (
    ModelParameters,
    check_ancestor_type,
    check_mutation_rate,
    check_observed,
    check_sample_size,
    check_selection_strength,
    check_trials,
)


class TestChecks:
    """Test the individual validators."""

    @pytest.mark.parametrize("n", [1, 0, -3, 2.5, True, "4"])
    def test_bad_sample_size(self, n):
        with pytest.raises(InvalidParameterError, match="n_samples"):
            check_sample_size(n)

    def test_sample_size(self):
        assert check_sample_size(2) == 2
        assert check_sample_size(np.int64(7)) == 7

    @pytest.mark.parametrize("sigma", [-0.1, float("inf"), float("nan"), "1"])
    def test_bad_sigma(self, sigma):
        with pytest.raises(InvalidParameterError, match="sigma"):
            check_selection_strength(sigma)

    def test_sigma_zero_allowed(self):
        assert check_selection_strength(0) == 0.0

    @pytest.mark.parametrize("u", [0, -1.0, float("inf"), None])
    def test_bad_mutation_rate(self, u):
        with pytest.raises(InvalidParameterError, match="mutation_rate"):
            check_mutation_rate(u)

    @pytest.mark.parametrize("a", [2, -1, 0.5, True, None])
    def test_bad_ancestor_type(self, a):
        with pytest.raises(InvalidParameterError, match="ancestor_type"):
            check_ancestor_type(a)

    @pytest.mark.parametrize("trials", [0, -5, 10.0])
    def test_bad_trials(self, trials):
        with pytest.raises(InvalidParameterError, match="trials"):
            check_trials(trials)

    def test_observed(self):
        observed = check_observed([1, 0, 1], 3)
        assert observed.dtype == np.uint8
        assert observed.tolist() == [1, 0, 1]

    def test_observed_wrong_length(self):
        with pytest.raises(InvalidParameterError, match="length 3"):
            check_observed([1, 0], 3)

    def test_observed_bad_values(self):
        with pytest.raises(InvalidParameterError, match="0 or 1"):
            check_observed([1, 2, 0], 3)

    def test_errors_are_value_errors(self):
        """Callers catching ValueError still see parameter errors."""
        with pytest.raises(ValueError):
            check_sample_size(1)


class TestModelParameters:
    """Test the ModelParameters container."""

    def test_valid(self):
        params = ModelParameters(n_samples=4, sigma=1, mutation_rate=0.5)
        assert params.n_samples == 4
        assert params.sigma == 1.0
        assert isinstance(params.sigma, float)
        assert params.ancestor_type == 1

    def test_to_dict(self):
        params = ModelParameters(4, 0.5, 0.25, ancestor_type=0)
        assert params.to_dict() == {
            'n_samples': 4,
            'sigma': 0.5,
            'mutation_rate': 0.25,
            'ancestor_type': 0,
        }

    def test_invalid(self):
        with pytest.raises(InvalidParameterError):
            ModelParameters(n_samples=1, sigma=1.0, mutation_rate=0.5)
        with pytest.raises(InvalidParameterError):
            ModelParameters(n_samples=4, sigma=1.0, mutation_rate=0.0)

    def test_frozen(self):
        params = ModelParameters(4, 1.0, 0.5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.sigma = 2.0
