"""
Pytest configuration and shared fixtures.

The hand-built histories below are written from the ultimate ancestor to the
present; the comments list the active lineages after each event.
"""

import pytest

from asglik.core.events import BranchingEvent, CoalescenceEvent, EventHistory


@pytest.fixture
def pair_history():
    """Two samples joined by a single coalescence at time 1."""
    return EventHistory((CoalescenceEvent(1.0, 3, 1, 2),), n_samples=2)


@pytest.fixture
def branching_pair_history():
    """
    Two samples with one branching event.

    Looking backward: lineage 1 branches at 0.5 into 3 (continuing) and
    4 (incoming); 2 and 3 coalesce into 5 at 1.0; 4 and 5 coalesce into the
    ultimate ancestor 6 at 2.0.
    """
    return EventHistory(
        (
            CoalescenceEvent(2.0, 6, 4, 5),   # {4, 5}
            CoalescenceEvent(1.0, 5, 2, 3),   # {2, 3, 4}
            BranchingEvent(0.5, 1, 3, 4),     # {1, 2}
        ),
        n_samples=2,
    )


@pytest.fixture
def four_sample_history():
    """
    Four samples with one branching event and five internal lineages.

    Looking backward: 1 and 2 coalesce into 5 at 0.3; 3 branches into 6 and
    7 at 0.6; 4 and 6 coalesce into 8 at 0.9; 5 and 8 into 9 at 1.5; 7 and 9
    into the ultimate ancestor 10 at 2.5.
    """
    return EventHistory(
        (
            CoalescenceEvent(2.5, 10, 7, 9),  # {7, 9}
            CoalescenceEvent(1.5, 9, 5, 8),   # {5, 7, 8}
            CoalescenceEvent(0.9, 8, 4, 6),   # {4, 5, 6, 7}
            BranchingEvent(0.6, 3, 6, 7),     # {3, 4, 5}
            CoalescenceEvent(0.3, 5, 1, 2),   # {1, 2, 3, 4}
        ),
        n_samples=4,
    )
