"""Tests for projecting types from the ancestor onto the sample."""

import numpy as np
import pytest

from asglik.core.events import EventHistory, MutationEvent
from asglik.exceptions import InconsistentHistoryError, InvalidParameterError
from asglik.simulate.graph import simulate_graph
from asglik.simulate.mutations import overlay_mutations
from asglik.simulate.projection import project_sample


def with_mutations(history, *mutations):
    """Insert mutation events into a history, keeping time order."""
    events = sorted(
        history.events + tuple(MutationEvent(t, lin) for t, lin in mutations),
        key=lambda e: -e.time,
    )
    return EventHistory(tuple(events), history.n_samples)


class TestProjectSample:
    """Test suite for project_sample."""

    @pytest.mark.parametrize("ancestor_type", [0, 1])
    def test_no_mutations_copies_ancestor(self, four_sample_history, ancestor_type):
        sample = project_sample(four_sample_history, ancestor_type)
        assert sample.dtype == np.uint8
        assert sample.tolist() == [ancestor_type] * 4

    def test_mutation_on_sample_branch(self, pair_history):
        annotated = with_mutations(pair_history, (0.4, 2))
        assert project_sample(annotated, 0).tolist() == [0, 1]
        assert project_sample(annotated, 1).tolist() == [1, 0]

    def test_two_mutations_cancel(self, pair_history):
        annotated = with_mutations(pair_history, (0.6, 1), (0.2, 1))
        assert project_sample(annotated, 1).tolist() == [1, 1]

    def test_mutation_above_coalescence_reaches_both_children(self, four_sample_history):
        # Lineage 5 (parent of samples 1 and 2) is active between 1.5 and 0.3
        annotated = with_mutations(four_sample_history, (1.0, 5))
        assert project_sample(annotated, 0).tolist() == [1, 1, 0, 0]

    def test_incoming_type_one_wins(self, branching_pair_history):
        """Sample 1 descends from 3 (continuing) or 4 (incoming); type 1 dominates."""
        # Ancestor 0, mutation on the incoming branch 4: 4 -> 1, 3 stays 0
        annotated = with_mutations(branching_pair_history, (1.8, 4))
        assert project_sample(annotated, 0).tolist() == [1, 0]

    def test_continuing_type_one_wins(self, branching_pair_history):
        # Ancestor 0, mutation on the continuing branch 3 only
        annotated = with_mutations(branching_pair_history, (0.7, 3))
        assert project_sample(annotated, 0).tolist() == [1, 0]

    def test_type_zero_needs_both_branches(self, branching_pair_history):
        # Ancestor 1, incoming branch mutates to 0 but continuing stays 1
        annotated = with_mutations(branching_pair_history, (1.8, 4))
        assert project_sample(annotated, 1).tolist() == [1, 1]
        # Both branches mutate to 0
        annotated = with_mutations(branching_pair_history, (1.8, 4), (0.7, 3))
        assert project_sample(annotated, 1).tolist() == [0, 1]

    def test_invalid_ancestor_type(self, pair_history):
        with pytest.raises(InvalidParameterError, match="ancestor_type"):
            project_sample(pair_history, 2)

    def test_inconsistent_history(self, branching_pair_history):
        # Lineage 1 does not exist before the branching event at 0.5
        annotated = with_mutations(branching_pair_history, (1.8, 1))
        with pytest.raises(InconsistentHistoryError) as info:
            project_sample(annotated, 0)
        assert info.value.index == 1

    def test_simulated_samples(self):
        """Projected samples have one binary type per sampled lineage."""
        for seed in range(10):
            history = simulate_graph(6, 1.0, seed=seed)
            annotated = overlay_mutations(history, 0.5, seed=100 + seed)
            sample = project_sample(annotated, 1)
            assert sample.shape == (6,)
            assert set(sample.tolist()) <= {0, 1}

    def test_deterministic(self, four_sample_history):
        annotated = overlay_mutations(four_sample_history, 1.0, seed=9)
        a = project_sample(annotated, 1)
        b = project_sample(annotated, 1)
        assert np.array_equal(a, b)
