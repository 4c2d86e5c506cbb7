"""
Propagation of types from the ultimate ancestor to the sample.
"""

import numpy as np

from ..core.events import EventHistory, EventKind, replay
from ..exceptions import InconsistentHistoryError
from ..params import check_ancestor_type


def project_sample(annotated: EventHistory, ancestor_type: int) -> np.ndarray:
    """
    Compute the sampled types implied by a mutation-annotated history.

    Types are pushed forward in time from the ultimate ancestor:

    - at a coalescence both merging lineages inherit the parent's type;
    - at a branching event the descendant lineage is type 1 if either the
      continuing or the incoming branch is type 1 (selection favours type 1);
    - a mutation toggles the type of its lineage.

    Parameters
    ----------
    annotated : EventHistory
        Event history, usually with mutations from
        :class:`~asglik.simulate.mutations.MutationOverlay`
    ancestor_type : int
        Type of the ultimate ancestor (0 or 1)

    Returns
    -------
    np.ndarray, shape (n_samples,), dtype=uint8
        Type of each sampled lineage, ordered by id 1..n_samples

    Raises
    ------
    InconsistentHistoryError
        If an event refers to a lineage that is not active
    """
    ancestor_type = check_ancestor_type(ancestor_type)
    types = {annotated.ancestor: ancestor_type}

    for _, event, _ in replay(annotated.with_present()):
        if event.kind is EventKind.COALESCENCE:
            parent_type = types.pop(event.parent)
            types[event.left] = parent_type
            types[event.right] = parent_type
        elif event.kind is EventKind.BRANCHING:
            types[event.lineage] = types.pop(event.continuing) | types.pop(event.incoming)
        elif event.kind is EventKind.MUTATION:
            types[event.lineage] ^= 1

    samples = range(1, annotated.n_samples + 1)
    if set(types) != set(samples):
        raise InconsistentHistoryError(
            f"replay ends with lineages {sorted(types)}, expected the samples "
            f"1..{annotated.n_samples}",
            index=len(annotated),
        )

    return np.array(
        [types[i] for i in samples], dtype=np.uint8
    )
