"""
Tests for validate_likelihood.
"""

import json

import pytest

from asglik.analysis.validation import validate_likelihood
from asglik.core.likelihood import likelihood
from asglik.exceptions import EnumerationTooLargeError, InvalidParameterError
from asglik.simulate.graph import simulate_graph


class TestValidateLikelihood:
    """Test the exact versus Monte-Carlo comparison."""

    def test_agrees(self, four_sample_history):
        result = validate_likelihood(
            [1, 1, 1, 1], four_sample_history, 0.5, 1, trials=10_000, seed=11
        )
        assert result.agrees
        assert result.exact == likelihood([1, 1, 1, 1], four_sample_history, 0.5, 1)
        assert result.trials == 10_000
        assert result.difference <= 0.02
        assert abs(result.z_score) < 5

    def test_params_recorded(self, four_sample_history):
        result = validate_likelihood(
            [1, 0, 1, 1], four_sample_history, 0.5, 1, trials=200, seed=1
        )
        assert result.params == {
            'mutation_rate': 0.5,
            'ancestor_type': 1,
            'n_samples': 4,
            'n_internal': 5,
            'n_branchings': 1,
        }

    def test_summary(self, pair_history):
        result = validate_likelihood([1, 1], pair_history, 0.5, 1, trials=10_000, seed=5)
        summary = result.summary()
        assert "EXACT LIKELIHOOD vs MONTE-CARLO" in summary
        assert "Result: AGREE" in summary
        assert "10000 trials" in summary

    def test_to_json(self, pair_history, tmp_path):
        result = validate_likelihood([1, 0], pair_history, 0.5, 1, trials=300, seed=5)
        filepath = tmp_path / "validation.json"
        json_str = result.to_json(str(filepath))
        assert filepath.exists()
        data = json.loads(filepath.read_text())
        assert data == json.loads(json_str)
        assert data['trials'] == 300
        assert data['params']['n_samples'] == 2

    def test_warns_on_disagreement(self, pair_history):
        with pytest.warns(UserWarning, match="differ by more than"):
            result = validate_likelihood(
                [1, 0], pair_history, 0.5, 1, trials=100, seed=5, tolerance=0.0
            )
        assert not result.agrees
        assert "DISAGREE" in result.summary()

    def test_too_large_history(self):
        history = simulate_graph(30, 0.0, seed=1)
        with pytest.raises(EnumerationTooLargeError):
            validate_likelihood([1] * 30, history, 0.5, 1, trials=10)

    def test_parameters_checked_before_history(self):
        history = simulate_graph(30, 0.0, seed=1)
        with pytest.raises(InvalidParameterError, match="ancestor_type"):
            validate_likelihood([1] * 30, history, 0.5, 7, trials=10)
        with pytest.raises(InvalidParameterError, match="trials"):
            validate_likelihood([1] * 30, history, 0.5, 1, trials=0)
